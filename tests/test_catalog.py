"""Tests for the local and HTTP video catalogs."""

from unittest.mock import MagicMock

import pytest
import requests
import yaml

from autocc.catalog import HTTPVideoCatalog, LocalVideoCatalog
from autocc.exceptions import BackendError, NotFoundError, UploadFailedError
from autocc.models import VideoMetadata


@pytest.fixture
def local_root(tmp_path, sample_srt):
    video_dir = tmp_path / "vid1"
    (video_dir / "captions").mkdir(parents=True)
    (video_dir / "captions" / "en.srt").write_text(sample_srt, encoding="utf-8")
    (video_dir / "metadata.yaml").write_text(
        yaml.safe_dump({"title": "A;B", "description": "C;D", "language": "en"}), encoding="utf-8"
    )
    return tmp_path


class TestLocalVideoCatalog:
    def test_fetch_metadata(self, local_root):
        catalog = LocalVideoCatalog(str(local_root))
        assert catalog.fetch_metadata("vid1") == VideoMetadata("A;B", "C;D", "en")

    def test_fetch_source_text(self, local_root, sample_srt):
        assert LocalVideoCatalog(str(local_root)).fetch_source_text("vid1", "EN") == sample_srt

    def test_missing_video(self, local_root):
        with pytest.raises(NotFoundError):
            LocalVideoCatalog(str(local_root)).fetch_metadata("other")

    def test_missing_caption_language(self, local_root):
        with pytest.raises(NotFoundError):
            LocalVideoCatalog(str(local_root)).fetch_source_text("vid1", "de")

    def test_upload_caption_writes_track(self, local_root):
        catalog = LocalVideoCatalog(str(local_root))

        catalog.upload_caption("vid1", "de", "1\nT\nHALLO\n\n")

        assert (local_root / "vid1" / "captions" / "de.srt").read_text(encoding="utf-8") == "1\nT\nHALLO\n\n"
        assert catalog.fetch_source_text("vid1", "de") == "1\nT\nHALLO\n\n"

    def test_upsert_merges_by_language(self, local_root):
        catalog = LocalVideoCatalog(str(local_root))

        catalog.upsert_metadata("vid1", [VideoMetadata("T-de", "D-de", "de"), VideoMetadata("T-fr", "D-fr", "fr")])
        catalog.upsert_metadata("vid1", [VideoMetadata("T-de2", "D-de2", "de")])

        data = yaml.safe_load((local_root / "vid1" / "localizations.yaml").read_text(encoding="utf-8"))
        assert data == {
            "de": {"title": "T-de2", "description": "D-de2"},
            "fr": {"title": "T-fr", "description": "D-fr"},
        }

    def test_upload_into_a_file_path_fails(self, local_root):
        (local_root / "vid2").write_text("not a directory", encoding="utf-8")
        with pytest.raises(UploadFailedError):
            LocalVideoCatalog(str(local_root)).upload_caption("vid2", "de", "x")


def make_response(status=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = json_data
    response.text = text
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return response


class TestHTTPVideoCatalog:
    def test_fetch_metadata(self):
        session = MagicMock()
        session.get.return_value = make_response(json_data={"title": "T", "description": "D", "language": "en"})
        catalog = HTTPVideoCatalog("http://api.test/", session=session)

        assert catalog.fetch_metadata("vid1") == VideoMetadata("T", "D", "en")
        session.get.assert_called_once_with("http://api.test/videos/vid1", timeout=30.0)

    def test_fetch_source_text_picks_matching_track(self):
        session = MagicMock()
        session.get.side_effect = [
            make_response(json_data=[{"id": "cc-1", "language": "de"}, {"id": "cc-2", "language": "en"}]),
            make_response(text="1\nT\nHello\n\n\n"),
        ]
        catalog = HTTPVideoCatalog("http://api.test", session=session)

        assert catalog.fetch_source_text("vid1", "EN") == "1\nT\nHello"
        assert session.get.call_args_list[1].args == ("http://api.test/cc/cc-2",)

    def test_no_matching_track(self):
        session = MagicMock()
        session.get.return_value = make_response(json_data=[{"id": "cc-1", "language": "de"}])
        with pytest.raises(NotFoundError):
            HTTPVideoCatalog("http://api.test", session=session).fetch_source_text("vid1", "en")

    def test_404_is_not_found(self):
        session = MagicMock()
        session.get.return_value = make_response(status=404)
        with pytest.raises(NotFoundError):
            HTTPVideoCatalog("http://api.test", session=session).fetch_metadata("vid1")

    def test_server_error_is_backend_error(self):
        session = MagicMock()
        session.get.return_value = make_response(status=500)
        with pytest.raises(BackendError):
            HTTPVideoCatalog("http://api.test", session=session).fetch_metadata("vid1")

    def test_non_json_metadata_is_backend_error(self):
        session = MagicMock()
        response = make_response()
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        session.get.return_value = response
        with pytest.raises(BackendError):
            HTTPVideoCatalog("http://api.test", session=session).fetch_metadata("vid1")

    @pytest.mark.parametrize("body", [{"id": "cc-1", "language": "en"}, ["cc-1"], [{"language": "en"}]])
    def test_malformed_caption_list_is_backend_error(self, body):
        session = MagicMock()
        session.get.return_value = make_response(json_data=body)
        with pytest.raises(BackendError):
            HTTPVideoCatalog("http://api.test", session=session).fetch_source_text("vid1", "en")

    def test_upload_caption(self):
        session = MagicMock()
        session.post.return_value = make_response()
        HTTPVideoCatalog("http://api.test", session=session).upload_caption("vid1", "de", "1\nT\nHALLO\n\n")

        args, kwargs = session.post.call_args
        assert args == ("http://api.test/videos/vid1/cc/de",)
        assert kwargs["data"] == "1\nT\nHALLO\n\n".encode("utf-8")

    def test_upload_connection_error(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(UploadFailedError):
            HTTPVideoCatalog("http://api.test", session=session).upload_caption("vid1", "de", "x")

    def test_upsert_metadata_posts_records(self):
        session = MagicMock()
        session.post.return_value = make_response()
        HTTPVideoCatalog("http://api.test", session=session).upsert_metadata(
            "vid1", [VideoMetadata("T", "D", "de")]
        )

        _, kwargs = session.post.call_args
        assert kwargs["json"] == [{"title": "T", "description": "D", "language": "de"}]

    def test_upsert_http_error(self):
        session = MagicMock()
        session.post.return_value = make_response(status=403)
        with pytest.raises(UploadFailedError):
            HTTPVideoCatalog("http://api.test", session=session).upsert_metadata("vid1", [])
