"""Orchestrates caption and metadata translation for a video."""

import logging
import threading
import time
from typing import List, Optional, Sequence, Tuple

from .catalog import VideoCatalog
from .orchestrator import TranslationOrchestrator
from .subtitle_codec import SubtitleCodec, SRTCodec
from .field_pack import DEFAULT_SEPARATOR, pack_fields
from .reassembly import reassemble_document, reassemble_metadata
from .models import FlowReport, TranslationJob, VideoMetadata
from .exceptions import AutoCCError, UploadFailedError

logger = logging.getLogger(__name__)

CAPTIONS_FLOW = "captions"
METADATA_FLOW = "metadata"

def plan_target_languages(source_language: str, target_languages: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Drops targets equal to the source language and repeated targets.

    Returns:
        (targets to translate, in request order; dropped codes)
    """
    planned, skipped, seen = [], [], {source_language.lower()}
    for language in target_languages:
        if language.lower() in seen:
            skipped.append(language)
            continue
        seen.add(language.lower())
        planned.append(language)
    if skipped:
        logger.info(f"Skipping target languages {skipped} (source language or duplicates).")
    return planned, skipped


class TranslationPipeline:
    """
    Composes parsing, fan-out translation, reassembly and publishing.

    Nothing is retried or cached. Only languages whose translation fully
    succeeded are handed to the catalog; failed languages are reported,
    never filled in.
    """

    def __init__(
        self,
        catalog: VideoCatalog,
        orchestrator: TranslationOrchestrator,
        codec: Optional[SubtitleCodec] = None,
        separator: str = DEFAULT_SEPARATOR
    ):
        """
        Initializes the TranslationPipeline.

        Args:
            catalog: Source of captions/metadata and sink for results.
            orchestrator: Runs the per-language translation calls.
            codec: Subtitle codec, SRT when omitted.
            separator: Reserved character splitting metadata fields.
        """
        self.catalog = catalog
        self.orchestrator = orchestrator
        self.codec = codec or SRTCodec()
        self.separator = separator

    def translate_captions(
        self,
        video_id: str,
        source_language: str,
        target_languages: Sequence[str],
        cancel_event: Optional[threading.Event] = None
    ) -> FlowReport:
        """
        Translates a video's caption track into each target language and uploads the results.

        Raises:
            NotFoundError: If the source caption track does not exist.
            MalformedDocumentError: If the source captions cannot be parsed.
            JobCancelledError: If cancel_event is set before translation finishes.
        """
        start_time = time.time()
        logger.info(f"--- Translating '{source_language}' captions of '{video_id}' ---")
        targets, skipped = plan_target_languages(source_language, target_languages)
        report = FlowReport(video_id=video_id, flow=CAPTIONS_FLOW, source_language=source_language, skipped=skipped)

        raw = self.catalog.fetch_source_text(video_id, source_language)
        document = self.codec.parse(raw)
        logger.info(f"Parsed {len(document)} caption segments.")
        if not targets:
            logger.warning("No target languages left to translate captions into.")
            return report

        job = TranslationJob(source_language=source_language, source_texts=document.texts(), target_languages=targets)
        outcome = self.orchestrator.translate(job, cancel_event=cancel_event)

        for result in outcome.results:
            if not result.ok:
                report.failures[result.language] = result.error
                continue
            try:
                translated = reassemble_document(document, result.texts)
            except AutoCCError as e:
                logger.error(f"Could not reassemble '{result.language}' captions: {e}")
                report.failures[result.language] = e
                continue
            report.artifacts[result.language] = self.codec.serialize(translated)

        for language, caption_text in report.artifacts.items():
            try:
                self.catalog.upload_caption(video_id, language, caption_text)
            except UploadFailedError as e:
                logger.error(f"Upload of '{language}' captions for '{video_id}' failed: {e}")
                report.publish_failures[language] = e

        self._log_report(report, time.time() - start_time)
        return report

    def translate_metadata(
        self,
        video_id: str,
        target_languages: Sequence[str],
        cancel_event: Optional[threading.Event] = None,
        metadata: Optional[VideoMetadata] = None
    ) -> FlowReport:
        """
        Translates a video's title and description and upserts one record per language.

        Args:
            video_id: Catalog id of the video.
            target_languages: Languages to translate into, in order.
            cancel_event: Optional event to abandon the job.
            metadata: Already fetched source metadata; fetched when omitted.

        Raises:
            NotFoundError: If the video does not exist.
            JobCancelledError: If cancel_event is set before translation finishes.
        """
        start_time = time.time()
        if metadata is None:
            metadata = self.catalog.fetch_metadata(video_id)
        logger.info(f"--- Translating '{metadata.language}' metadata of '{video_id}' ---")
        targets, skipped = plan_target_languages(metadata.language, target_languages)
        report = FlowReport(video_id=video_id, flow=METADATA_FLOW, source_language=metadata.language, skipped=skipped)
        if not targets:
            logger.warning("No target languages left to translate metadata into.")
            return report

        batch = pack_fields([metadata.title, metadata.description], self.separator)
        job = TranslationJob(source_language=metadata.language, source_texts=batch.texts, target_languages=targets)
        outcome = self.orchestrator.translate(job, cancel_event=cancel_event)

        for result in outcome.results:
            if not result.ok:
                report.failures[result.language] = result.error
                continue
            try:
                report.artifacts[result.language] = reassemble_metadata(batch, result.texts, result.language)
            except AutoCCError as e:
                logger.error(f"Could not reassemble '{result.language}' metadata: {e}")
                report.failures[result.language] = e

        if report.artifacts:
            try:
                self.catalog.upsert_metadata(video_id, list(report.artifacts.values()))
            except UploadFailedError as e:
                logger.error(f"Metadata upsert for '{video_id}' failed: {e}")
                for language in report.artifacts:
                    report.publish_failures[language] = e

        self._log_report(report, time.time() - start_time)
        return report

    def translate_video(
        self,
        video_id: str,
        target_languages: Sequence[str],
        cancel_event: Optional[threading.Event] = None
    ) -> List[FlowReport]:
        """Runs the metadata flow, then the caption flow in the video's own language."""
        metadata = self.catalog.fetch_metadata(video_id)
        reports = [self.translate_metadata(video_id, target_languages, cancel_event=cancel_event, metadata=metadata)]
        reports.append(self.translate_captions(video_id, metadata.language, target_languages, cancel_event=cancel_event))
        return reports

    def _log_report(self, report: FlowReport, elapsed: float) -> None:
        logger.info(
            f"--- {report.flow.capitalize()} flow for '{report.video_id}' finished in {elapsed:.2f} seconds: "
            f"{len(report.succeeded_languages)} succeeded, {len(report.failed_languages)} failed ---"
        )
        for language in report.failed_languages:
            error = report.failures.get(language) or report.publish_failures.get(language)
            logger.warning(f"  {language}: {error}")
