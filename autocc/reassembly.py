"""Maps per-language translated strings back onto the structures they came from."""

from typing import List, Sequence

from .models import FieldBatch, SegmentedDocument, VideoMetadata
from .field_pack import unpack_fields
from .exceptions import LengthMismatchError

def reassemble_document(original: SegmentedDocument, translated_texts: Sequence[str]) -> SegmentedDocument:
    """
    Returns a clone of `original` with each segment's text replaced positionally.

    Raises:
        LengthMismatchError: If the number of texts differs from the number of segments.
    """
    if len(translated_texts) != len(original):
        raise LengthMismatchError(
            f"Got {len(translated_texts)} translated texts for {len(original)} segments."
        )
    document = original.clone()
    for segment, text in zip(document.segments, translated_texts):
        segment.text = text
    return document

def reassemble_fields(boundaries: Sequence[int], translated: Sequence[str]) -> List[str]:
    return unpack_fields(boundaries, translated)

def reassemble_metadata(batch: FieldBatch, translated: Sequence[str], language: str) -> VideoMetadata:
    """Builds the title/description record for one target language."""
    title, description = reassemble_fields(batch.boundaries, translated)
    return VideoMetadata(title=title, description=description, language=language)
