"""Parses and serializes SRT subtitle text into segmented documents."""

import logging
import re
from abc import ABC, abstractmethod

from .models import Segment, SegmentedDocument
from .exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)

# One or more empty / whitespace-only lines between records
RECORD_SEPARATOR = re.compile(r"\n(?:[ \t]*\n)+")

class SubtitleCodec(ABC):
    """Abstract base class for subtitle container codecs."""

    @abstractmethod
    def parse(self, raw: str) -> SegmentedDocument:
        """
        Parses raw subtitle text into a segmented document.

        Args:
            raw: The container text.

        Returns:
            A SegmentedDocument with at least one segment.

        Raises:
            MalformedDocumentError: If the text is not structurally valid.
        """
        pass

    @abstractmethod
    def serialize(self, document: SegmentedDocument) -> str:
        """Serializes a segmented document back to container text."""
        pass


class SRTCodec(SubtitleCodec):
    """SubRip (SRT) codec. Time ranges are carried through as opaque strings."""

    def parse(self, raw: str) -> SegmentedDocument:
        text = raw.replace('\r\n', '\n').replace('\r', '\n')
        if text.startswith('\ufeff'):
            text = text[1:]

        segments = []
        for position, record in enumerate(RECORD_SEPARATOR.split(text), start=1):
            if not record.strip():
                continue # Leading/trailing blank block
            lines = record.split('\n')
            while not lines[0].strip():
                lines.pop(0)
            while not lines[-1].strip():
                lines.pop()
            if len(lines) < 2:
                raise MalformedDocumentError(
                    f"Subtitle record {position} has {len(lines)} line(s); "
                    f"expected a sequence id and a time range: {record[:50]!r}"
                )
            segments.append(
                Segment(
                    sequence_id=lines[0].strip(),
                    time_range=lines[1].strip(),
                    text='\n'.join(lines[2:]) # Keep caption line breaks
                )
            )

        if not segments:
            raise MalformedDocumentError("Subtitle text contains no segments.")
        logger.debug(f"Parsed {len(segments)} SRT segments.")
        return SegmentedDocument(segments=segments)

    def _record_text(self, text: str) -> str:
        # A blank line inside the text would end the record early
        lines = [line for line in text.replace('\r\n', '\n').replace('\r', '\n').split('\n') if line.strip(' \t')]
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        return '\n'.join(lines)

    def serialize(self, document: SegmentedDocument) -> str:
        parts = []
        for segment in document.segments:
            parts.append(f"{segment.sequence_id}\n{segment.time_range}\n{self._record_text(segment.text)}\n\n")
        return ''.join(parts)
