"""Shared stubs for the AutoCC tests."""

import threading
from typing import Callable, Dict, List, Optional

import pytest

from autocc.catalog import VideoCatalog
from autocc.exceptions import NotFoundError, UploadFailedError
from autocc.models import VideoMetadata
from autocc.translator import Translator


SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Hello\n"
    "\n"
    "2\n"
    "00:00:02,500 --> 00:00:03,000\n"
    "World"
)


class StubTranslator(Translator):
    """Applies `transform` to every text; per-language overrides replace the whole call."""

    def __init__(self, transform: Callable[[str], str] = str.upper, overrides: Optional[Dict[str, Callable]] = None):
        self.transform = transform
        self.overrides = overrides or {}
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def translate(self, texts, source_lang, target_lang):
        with self._lock:
            self.calls.append((list(texts), source_lang, target_lang))
        if target_lang in self.overrides:
            return self.overrides[target_lang](texts)
        return [self.transform(text) for text in texts]


class InMemoryCatalog(VideoCatalog):
    def __init__(self, captions=None, metadata=None, failing_uploads=(), fail_upsert=False):
        self.captions = dict(captions or {})
        self.metadata = dict(metadata or {})
        self.failing_uploads = set(failing_uploads)
        self.fail_upsert = fail_upsert
        self.uploads: Dict[tuple, str] = {}
        self.upserts: List[tuple] = []

    def fetch_source_text(self, video_id, language):
        try:
            return self.captions[(video_id, language)]
        except KeyError:
            raise NotFoundError(f"No '{language}' captions for '{video_id}'")

    def fetch_metadata(self, video_id):
        try:
            return self.metadata[video_id]
        except KeyError:
            raise NotFoundError(f"Video '{video_id}' not found")

    def upload_caption(self, video_id, language, caption_text):
        if language in self.failing_uploads:
            raise UploadFailedError(f"upload of {language} rejected")
        self.uploads[(video_id, language)] = caption_text

    def upsert_metadata(self, video_id, records):
        if self.fail_upsert:
            raise UploadFailedError("upsert rejected")
        self.upserts.append((video_id, list(records)))


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def catalog():
    return InMemoryCatalog(
        captions={("vid1", "en"): SAMPLE_SRT},
        metadata={"vid1": VideoMetadata(title="A;B", description="C;D", language="en")},
    )
