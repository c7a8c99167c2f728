"""Handles text translation using Hugging Face models."""

import logging
import threading
import torch
from transformers import AutoTokenizer, AutoModelForSeq2SeqLM
from typing import Dict, List, Tuple

from .translator import Translator
from .exceptions import BackendError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_TEMPLATE = "Helsinki-NLP/opus-mt-{source}-{target}"

class HuggingFaceTranslator(Translator):
    """Implements translation using Hugging Face Transformers models, one model per language pair."""

    def __init__(self, model_template: str = DEFAULT_MODEL_TEMPLATE, device: str = "cuda", max_length: int = 512):
        """
        Initializes the HuggingFaceTranslator.

        Models are loaded lazily on first use of a language pair.

        Args:
            model_template: Model name with {source} and {target} placeholders.
            device: The device to run the models on ("cuda" or "cpu").
            max_length: Token limit per text.

        Raises:
            ValueError: If the specified device is invalid.
        """
        self.model_template = model_template
        self.device = device
        self.max_length = max_length

        if self.device == "cuda" and not torch.cuda.is_available():
            logger.warning("CUDA device requested but not available for translation. Falling back to CPU.")
            self.device = "cpu"
        elif self.device not in ["cuda", "cpu"]:
            raise ValueError(f"Invalid device specified: {self.device}. Choose 'cuda' or 'cpu'.")

        self._models: Dict[str, Tuple[object, object, threading.Lock]] = {}
        self._cache_lock = threading.Lock()
        logger.info(f"Initialized HuggingFaceTranslator with template '{self.model_template}' on device '{self.device}'")

    def model_name(self, source_lang: str, target_lang: str) -> str:
        return self.model_template.format(source=source_lang.lower(), target=target_lang.lower())

    def _load(self, model_name: str) -> Tuple[object, object, threading.Lock]:
        with self._cache_lock:
            if model_name in self._models:
                return self._models[model_name]
            try:
                tokenizer = AutoTokenizer.from_pretrained(model_name)
                model = AutoModelForSeq2SeqLM.from_pretrained(model_name)
                model.to(self.device)
                model.eval() # Set model to evaluation mode
            except Exception as e:
                logger.error(f"Failed to load translation model or tokenizer '{model_name}': {e}", exc_info=True)
                raise BackendError(f"Failed to load translation model/tokenizer '{model_name}': {e}") from e
            logger.info(f"Hugging Face translation model '{model_name}' loaded successfully.")
            self._models[model_name] = (tokenizer, model, threading.Lock())
            return self._models[model_name]

    def translate(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        if not texts:
            return []

        model_name = self.model_name(source_lang, target_lang)
        tokenizer, model, model_lock = self._load(model_name)

        logger.debug(f"Translating {len(texts)} texts ({source_lang}->{target_lang}) with '{model_name}'")
        try:
            inputs = tokenizer(list(texts), return_tensors="pt", padding=True, truncation=True, max_length=self.max_length)
            inputs = {k: v.to(self.device) for k, v in inputs.items()}

            with model_lock, torch.no_grad():
                translated_tokens = model.generate(**inputs)

            return tokenizer.batch_decode(translated_tokens, skip_special_tokens=True)

        except Exception as e:
            logger.error(f"Error during translation with '{model_name}': {e}", exc_info=True)
            raise BackendError(f"Hugging Face translation failed: {e}") from e
