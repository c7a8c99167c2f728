"""Translation backends that turn an ordered list of strings into another language."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from .exceptions import BackendError

logger = logging.getLogger(__name__)

DEFAULT_DEEPL_URL = "https://api-free.deepl.com/v2/"

# Catalog codes that DeepL spells differently
_DEEPL_CODE_OVERRIDES = {"no": "NB"}
_CATALOG_CODE_OVERRIDES = {v.lower(): k for k, v in _DEEPL_CODE_OVERRIDES.items()}

def to_deepl_code(language: str) -> str:
    return _DEEPL_CODE_OVERRIDES.get(language.lower(), language.upper())

def to_catalog_code(language: str) -> str:
    code = language.lower()
    return _CATALOG_CODE_OVERRIDES.get(code, code)

class Translator(ABC):
    """Abstract base class for translation services."""

    @abstractmethod
    def translate(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        """
        Translates a batch of texts from source to target language.

        Args:
            texts: The ordered texts to translate.
            source_lang: Source language code (e.g., 'en').
            target_lang: Target language code (e.g., 'de').

        Returns:
            The translated texts, one per input text and in the same order.

        Raises:
            BackendError: If translation fails.
        """
        pass

class DeepLTranslator(Translator):
    """Implements translation using the DeepL REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_DEEPL_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0
    ):
        """
        Initializes the DeepLTranslator.

        Args:
            api_key: DeepL authentication key.
            base_url: API root, ending with a slash.
            session: Optional requests session for connection pooling.
            timeout: Per-request timeout in seconds.

        Raises:
            ValueError: If no API key is given.
        """
        if not api_key:
            raise ValueError("DeepL API key cannot be empty.")
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"DeepL-Auth-Key {api_key}"})
        logger.info(f"Initialized DeepLTranslator against {self.base_url}")

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self.base_url + path
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"DeepL request {method} {url} failed: {e}")
            raise BackendError(f"DeepL request to '{path}' failed: {e}") from e

    def translate(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        if not texts:
            return []

        payload = {
            "text": list(texts),
            "source_lang": to_deepl_code(source_lang),
            "target_lang": to_deepl_code(target_lang),
        }
        logger.debug(f"Translating {len(texts)} texts ({source_lang}->{target_lang}) via DeepL")
        response = self._request("POST", "translate", json=payload)
        try:
            translations = response.json()["translations"]
            return [item["text"] for item in translations]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Unexpected DeepL translate response for {target_lang}: {e}")
            raise BackendError(f"Invalid DeepL translate response: {e}") from e

    def supported_languages(self) -> List[str]:
        """Returns the target language codes DeepL offers, in catalog spelling."""
        response = self._request("GET", "languages", params={"type": "target"})
        try:
            return [to_catalog_code(item["language"]) for item in response.json()]
        except (ValueError, KeyError, TypeError) as e:
            raise BackendError(f"Invalid DeepL languages response: {e}") from e
