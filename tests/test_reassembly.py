"""Tests for mapping translations back onto documents and metadata."""

import pytest

from autocc.exceptions import BatchSizeMismatchError, LengthMismatchError
from autocc.field_pack import pack_fields
from autocc.models import VideoMetadata
from autocc.reassembly import reassemble_document, reassemble_fields, reassemble_metadata
from autocc.subtitle_codec import SRTCodec


def test_reassemble_document_replaces_text_only(sample_srt):
    original = SRTCodec().parse(sample_srt)

    translated = reassemble_document(original, ["HELLO", "WORLD"])

    assert translated.texts() == ["HELLO", "WORLD"]
    assert [(s.sequence_id, s.time_range) for s in translated.segments] == \
        [(s.sequence_id, s.time_range) for s in original.segments]
    assert original.texts() == ["Hello", "World"]


@pytest.mark.parametrize("texts", [["only one"], ["a", "b", "c"], []])
def test_reassemble_document_length_mismatch(sample_srt, texts):
    original = SRTCodec().parse(sample_srt)
    with pytest.raises(LengthMismatchError):
        reassemble_document(original, texts)


def test_reassemble_fields_delegates_to_unpack():
    assert reassemble_fields([1, 2], ["t", "d1", "d2"]) == ["t", "d1d2"]
    with pytest.raises(BatchSizeMismatchError):
        reassemble_fields([1, 2], ["t", "d1"])


def test_reassemble_metadata():
    batch = pack_fields(["A;B", "C;D"])
    record = reassemble_metadata(batch, ["A!", "B!", "C!", "D!"], "de")
    assert record == VideoMetadata(title="A!B!", description="C!D!", language="de")
