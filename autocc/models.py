"""Data models for AutoCC."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

@dataclass
class Segment:
    """Represents a single timed subtitle unit. Only `text` is ever rewritten."""
    sequence_id: str
    time_range: str
    text: str

@dataclass
class SegmentedDocument:
    """Ordered subtitle segments; list order is playback order."""
    segments: List[Segment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def texts(self) -> List[str]:
        """Returns the segment texts in playback order."""
        return [segment.text for segment in self.segments]

    def clone(self) -> "SegmentedDocument":
        """
        Returns an independent copy of the document.

        Every segment is copied, so rewriting text on the clone never
        touches this document or any other clone.
        """
        return SegmentedDocument(
            segments=[Segment(s.sequence_id, s.time_range, s.text) for s in self.segments]
        )

@dataclass
class FieldBatch:
    """Flat list of translatable strings plus the number each field contributed."""
    texts: List[str]
    boundaries: List[int]

    def __len__(self) -> int:
        return len(self.texts)

@dataclass
class VideoMetadata:
    title: str
    description: str
    language: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.description, "language": self.language}

@dataclass
class TranslationJob:
    """One orchestration run: one source text list, many target languages."""
    source_language: str
    source_texts: List[str]
    target_languages: List[str]

    def __post_init__(self):
        if not self.source_language:
            raise ValueError("Translation job requires a source language.")
        if not self.source_texts:
            raise ValueError("Translation job requires at least one source text.")
        self.source_texts = list(self.source_texts)
        self.target_languages = list(self.target_languages)

@dataclass
class LanguageResult:
    """Whole-batch result for one target language: texts or an error, never both."""
    language: str
    texts: Optional[List[str]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class OutcomeStatus(Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"

@dataclass
class TranslationOutcome:
    """Per-language results, positionally aligned with job.target_languages."""
    job: TranslationJob
    results: List[LanguageResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[LanguageResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[LanguageResult]:
        return [r for r in self.results if not r.ok]

    @property
    def status(self) -> OutcomeStatus:
        if not self.failed:
            return OutcomeStatus.SUCCESS
        if self.succeeded:
            return OutcomeStatus.PARTIAL
        return OutcomeStatus.FAILED

    def by_language(self) -> Dict[str, LanguageResult]:
        return {r.language: r for r in self.results}

Artifact = Union[str, VideoMetadata]

@dataclass
class FlowReport:
    """What a pipeline flow produced for one video, language by language."""
    video_id: str
    flow: str
    source_language: str
    artifacts: Dict[str, Artifact] = field(default_factory=dict)
    failures: Dict[str, Exception] = field(default_factory=dict)
    publish_failures: Dict[str, Exception] = field(default_factory=dict) # Artifact kept so upload can be retried
    skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures and not self.publish_failures

    @property
    def succeeded_languages(self) -> List[str]:
        return [lang for lang in self.artifacts if lang not in self.publish_failures]

    @property
    def failed_languages(self) -> List[str]:
        return list(self.failures) + [lang for lang in self.publish_failures if lang not in self.failures]
