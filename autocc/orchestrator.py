"""Fans one translation job out across its target languages concurrently."""

import concurrent.futures
import logging
import threading
from typing import List, Optional

from .models import LanguageResult, TranslationJob, TranslationOutcome
from .translator import Translator
from .exceptions import AutoCCError, BackendError, JobCancelledError, TranslationSizeMismatchError

logger = logging.getLogger(__name__)

class TranslationOrchestrator:
    """
    Runs one backend call per target language and joins on all of them.

    A failing language never aborts its siblings: every call is allowed to
    settle and the outcome carries either texts or an error for each
    language, in the order the languages were requested.
    """

    def __init__(self, translator: Translator, max_workers: Optional[int] = None, poll_interval: float = 0.1):
        """
        Initializes the TranslationOrchestrator.

        Args:
            translator: Backend used for every per-language call.
            max_workers: Thread cap. None means one thread per target language.
            poll_interval: Seconds between cancellation checks while waiting.
        """
        self.translator = translator
        self.max_workers = max_workers
        self.poll_interval = poll_interval

    def _translate_one(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        translated = self.translator.translate(texts, source_lang, target_lang)
        if len(translated) != len(texts):
            raise TranslationSizeMismatchError(
                f"Backend returned {len(translated)} strings for {len(texts)} inputs ({source_lang}->{target_lang})."
            )
        return list(translated)

    def _collect(self, language: str, future: concurrent.futures.Future) -> LanguageResult:
        try:
            return LanguageResult(language=language, texts=future.result())
        except AutoCCError as e:
            logger.warning(f"Translation to '{language}' failed: {e}")
            return LanguageResult(language=language, error=e)
        except Exception as e:
            logger.error(f"Unexpected error translating to '{language}': {e}", exc_info=True)
            return LanguageResult(language=language, error=BackendError(f"Translation to '{language}' failed: {e}"))

    def translate(self, job: TranslationJob, cancel_event: Optional[threading.Event] = None) -> TranslationOutcome:
        """
        Translates the job's texts into every target language.

        Args:
            job: The texts, source language and ordered target languages.
            cancel_event: Optional event; once set the job is abandoned.

        Returns:
            A TranslationOutcome whose results line up with job.target_languages.

        Raises:
            JobCancelledError: If cancel_event was set before all calls settled.
        """
        if not job.target_languages:
            logger.info("Translation job has no target languages. Nothing to do.")
            return TranslationOutcome(job=job)

        workers = self.max_workers or len(job.target_languages)
        logger.info(
            f"Translating {len(job.source_texts)} texts from '{job.source_language}' "
            f"into {len(job.target_languages)} languages ({workers} workers)"
        )

        executor = concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="autocc-translate")
        futures = [
            executor.submit(self._translate_one, list(job.source_texts), job.source_language, language)
            for language in job.target_languages
        ]
        try:
            pending = set(futures)
            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    for future in pending:
                        future.cancel()
                    logger.warning(f"Translation job cancelled with {len(pending)} calls outstanding. Discarding results.")
                    raise JobCancelledError("Translation job was cancelled.")
                _, pending = concurrent.futures.wait(pending, timeout=self.poll_interval)
            if cancel_event is not None and cancel_event.is_set():
                raise JobCancelledError("Translation job was cancelled.")
        finally:
            # Running calls are abandoned, not awaited, once the job is cancelled
            executor.shutdown(wait=False)

        outcome = TranslationOutcome(
            job=job,
            results=[self._collect(lang, future) for lang, future in zip(job.target_languages, futures)]
        )
        logger.info(
            f"Translation job finished: {outcome.status.value} "
            f"({len(outcome.succeeded)} succeeded, {len(outcome.failed)} failed)"
        )
        return outcome
