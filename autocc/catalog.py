"""Video catalog collaborators: where source captions and metadata come from and results go to."""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional

import requests
import yaml

from .models import VideoMetadata
from .exceptions import BackendError, FileSystemError, NotFoundError, UploadFailedError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

class VideoCatalog(ABC):
    """Abstract base class for video catalogs."""

    @abstractmethod
    def fetch_source_text(self, video_id: str, language: str) -> str:
        """
        Returns the raw caption text of a video in the given language.

        Raises:
            NotFoundError: If the video has no caption track in that language.
        """
        pass

    @abstractmethod
    def fetch_metadata(self, video_id: str) -> VideoMetadata:
        """
        Returns the title, description and language of a video.

        Raises:
            NotFoundError: If the video does not exist.
        """
        pass

    @abstractmethod
    def upload_caption(self, video_id: str, language: str, caption_text: str) -> None:
        """
        Stores a caption track for a video.

        Raises:
            UploadFailedError: If the track could not be stored.
        """
        pass

    @abstractmethod
    def upsert_metadata(self, video_id: str, records: List[VideoMetadata]) -> None:
        """
        Inserts or replaces localized metadata, one record per language.

        Raises:
            UploadFailedError: If the records could not be stored.
        """
        pass


class LocalVideoCatalog(VideoCatalog):
    """
    Catalog kept in a directory tree:

        <root>/<video_id>/metadata.yaml          title, description, language
        <root>/<video_id>/captions/<lang>.srt    caption tracks
        <root>/<video_id>/localizations.yaml     translated metadata by language
    """

    def __init__(self, root: str):
        if not root:
            raise ValueError("Catalog root cannot be empty.")
        self.root = root
        logger.info(f"Using local video catalog at: {self.root}")

    def _video_dir(self, video_id: str) -> str:
        path = os.path.join(self.root, video_id)
        if not os.path.isdir(path):
            raise NotFoundError(f"Video '{video_id}' not found in catalog {self.root}")
        return path

    def caption_path(self, video_id: str, language: str) -> str:
        return os.path.join(self.root, video_id, "captions", f"{language.lower()}.srt")

    def fetch_source_text(self, video_id: str, language: str) -> str:
        self._video_dir(video_id)
        path = self.caption_path(video_id, language)
        if not os.path.isfile(path):
            raise NotFoundError(f"No '{language}' captions for video '{video_id}'")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except IOError as e:
            raise FileSystemError(f"Could not read captions {path}: {e}") from e

    def _read_yaml(self, path: str) -> dict:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (IOError, yaml.YAMLError) as e:
            logger.error(f"Error reading {path}: {e}")
            raise FileSystemError(f"Could not read {path}: {e}") from e
        return data or {}

    def fetch_metadata(self, video_id: str) -> VideoMetadata:
        path = os.path.join(self._video_dir(video_id), "metadata.yaml")
        if not os.path.isfile(path):
            raise NotFoundError(f"No metadata for video '{video_id}'")
        data = self._read_yaml(path)
        try:
            return VideoMetadata(
                title=str(data.get('title', '')),
                description=str(data.get('description', '')),
                language=str(data['language'])
            )
        except (KeyError, AttributeError) as e:
            raise FileSystemError(f"Metadata file {path} is missing a 'language' entry") from e

    def upload_caption(self, video_id: str, language: str, caption_text: str) -> None:
        path = self.caption_path(video_id, language)
        try:
            ensure_dir_exists(os.path.dirname(path))
            with open(path, 'w', encoding='utf-8') as f:
                f.write(caption_text)
        except (FileSystemError, IOError) as e:
            logger.error(f"Failed to store '{language}' captions for '{video_id}': {e}")
            raise UploadFailedError(f"Could not store captions {path}: {e}") from e
        logger.info(f"Stored '{language}' captions for '{video_id}' at {path}")

    def upsert_metadata(self, video_id: str, records: List[VideoMetadata]) -> None:
        path = os.path.join(self.root, video_id, "localizations.yaml")
        try:
            existing = self._read_yaml(path) if os.path.isfile(path) else {}
            for record in records:
                existing[record.language] = {"title": record.title, "description": record.description}
            ensure_dir_exists(os.path.dirname(path))
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(existing, f, allow_unicode=True, sort_keys=True)
        except (FileSystemError, IOError, yaml.YAMLError) as e:
            logger.error(f"Failed to upsert metadata for '{video_id}': {e}")
            raise UploadFailedError(f"Could not store localized metadata {path}: {e}") from e
        logger.info(f"Upserted {len(records)} metadata records for '{video_id}'")


class HTTPVideoCatalog(VideoCatalog):
    """Catalog backed by the video service REST API."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 30.0):
        """
        Initializes the HTTPVideoCatalog.

        Args:
            base_url: Service root, e.g. 'http://localhost:8080'.
            session: Optional requests session for connection pooling.
            timeout: Per-request timeout in seconds.
        """
        if not base_url:
            raise ValueError("Catalog URL cannot be empty.")
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        logger.info(f"Using HTTP video catalog at: {self.base_url}")

    def _get(self, path: str, what: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendError(f"Failed to fetch {what}: {e}") from e
        if response.status_code == 404:
            raise NotFoundError(f"{what} not found")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise BackendError(f"Failed to fetch {what}: {e}") from e
        return response

    def _post(self, path: str, what: str, **kwargs) -> None:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Upload of {what} failed: {e}")
            raise UploadFailedError(f"Failed to upload {what}: {e}") from e

    def _get_json(self, path: str, what: str):
        response = self._get(path, what)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{what}: response is not valid JSON: {e}")
            raise BackendError(f"Invalid response for {what}: {e}") from e

    def fetch_metadata(self, video_id: str) -> VideoMetadata:
        data = self._get_json(f"/videos/{video_id}", f"Metadata of video '{video_id}'")
        try:
            return VideoMetadata(title=data['title'], description=data['description'], language=data['language'])
        except (KeyError, TypeError) as e:
            raise BackendError(f"Invalid metadata response for '{video_id}': {e}") from e

    def fetch_source_text(self, video_id: str, language: str) -> str:
        entries = self._get_json(f"/videos/{video_id}/cc", f"Captions of video '{video_id}'") or []
        if not isinstance(entries, list) or not all(isinstance(e, dict) and 'id' in e for e in entries):
            raise BackendError(f"Invalid caption list response for '{video_id}': {entries!r:.100}")
        match = next((e for e in entries if str(e.get('language', '')).lower() == language.lower()), None)
        if match is None:
            raise NotFoundError(f"No '{language}' captions for video '{video_id}'")
        response = self._get(f"/cc/{match['id']}", f"Caption track '{match['id']}'")
        return response.text.rstrip()

    def upload_caption(self, video_id: str, language: str, caption_text: str) -> None:
        self._post(
            f"/videos/{video_id}/cc/{language}",
            f"'{language}' captions of '{video_id}'",
            data=caption_text.encode('utf-8'),
            headers={"Content-Type": "text/plain; charset=utf-8"}
        )
        logger.info(f"Uploaded '{language}' captions for '{video_id}'")

    def upsert_metadata(self, video_id: str, records: List[VideoMetadata]) -> None:
        self._post(
            f"/videos/{video_id}",
            f"metadata of '{video_id}'",
            json=[record.to_dict() for record in records]
        )
        logger.info(f"Upserted {len(records)} metadata records for '{video_id}'")
