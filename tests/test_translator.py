"""Tests for the DeepL translation backend."""

from unittest.mock import MagicMock

import pytest
import requests

from autocc.exceptions import BackendError
from autocc.translator import DeepLTranslator, to_catalog_code, to_deepl_code


def make_session(json_data=None, status_error=None):
    session = MagicMock()
    session.headers = {}
    response = MagicMock()
    response.json.return_value = json_data
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    session.request.return_value = response
    return session


class TestLanguageCodes:
    @pytest.mark.parametrize("code, expected", [("de", "DE"), ("no", "NB"), ("NO", "NB"), ("pt-br", "PT-BR")])
    def test_to_deepl(self, code, expected):
        assert to_deepl_code(code) == expected

    @pytest.mark.parametrize("code, expected", [("DE", "de"), ("NB", "no"), ("nb", "no")])
    def test_to_catalog(self, code, expected):
        assert to_catalog_code(code) == expected


class TestDeepLTranslator:
    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            DeepLTranslator(api_key="")

    def test_sets_auth_header(self):
        session = make_session()
        DeepLTranslator(api_key="secret", session=session)
        assert session.headers["Authorization"] == "DeepL-Auth-Key secret"

    def test_translate_batch(self):
        session = make_session({"translations": [{"text": "Hallo"}, {"text": "Welt"}]})
        translator = DeepLTranslator(api_key="k", base_url="https://deepl.test/v2", session=session)

        assert translator.translate(["Hello", "World"], "en", "no") == ["Hallo", "Welt"]

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://deepl.test/v2/translate")
        assert kwargs["json"] == {"text": ["Hello", "World"], "source_lang": "EN", "target_lang": "NB"}
        assert kwargs["timeout"] == 30.0

    def test_empty_batch_makes_no_request(self):
        session = make_session()
        assert DeepLTranslator(api_key="k", session=session).translate([], "en", "de") == []
        session.request.assert_not_called()

    def test_http_error(self):
        session = make_session(status_error=requests.HTTPError("456 Quota exceeded"))
        with pytest.raises(BackendError):
            DeepLTranslator(api_key="k", session=session).translate(["Hello"], "en", "de")

    def test_connection_error(self):
        session = make_session()
        session.request.side_effect = requests.Timeout("timed out")
        with pytest.raises(BackendError):
            DeepLTranslator(api_key="k", session=session).translate(["Hello"], "en", "de")

    def test_unexpected_payload(self):
        session = make_session({"unexpected": []})
        with pytest.raises(BackendError):
            DeepLTranslator(api_key="k", session=session).translate(["Hello"], "en", "de")

    def test_supported_languages(self):
        session = make_session([{"language": "DE", "name": "German"}, {"language": "NB", "name": "Norwegian"}])
        assert DeepLTranslator(api_key="k", session=session).supported_languages() == ["de", "no"]
