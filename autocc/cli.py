"""Command-Line Interface handler for AutoCC."""

import argparse
import logging
import sys
from typing import List, Optional

from .config_loader import ConfigLoader
from .log_setup import setup_logging
from .catalog import VideoCatalog, LocalVideoCatalog, HTTPVideoCatalog
from .translator import Translator, DeepLTranslator
from .orchestrator import TranslationOrchestrator
from .pipeline import TranslationPipeline, CAPTIONS_FLOW, METADATA_FLOW
from .models import FlowReport
from .exceptions import AutoCCError, ConfigurationError

logger = logging.getLogger(__name__) # Get logger for this module

ALL_FLOWS = "all"

def build_translator(config: dict) -> Translator:
    """Creates the translation backend named by config['backend']."""
    backend = str(config.get('backend', 'huggingface')).lower()
    if backend == 'deepl':
        api_key = config.get('deepl_api_key')
        if not api_key:
            raise ConfigurationError("DeepL backend selected but no 'deepl_api_key' (or AUTOCC_DEEPL_API_KEY) is set.")
        return DeepLTranslator(
            api_key=api_key,
            base_url=config.get('deepl_api_url', 'https://api-free.deepl.com/v2/'),
            timeout=float(config.get('request_timeout_seconds', 30))
        )
    if backend == 'huggingface':
        # Imported here so the DeepL backend works without torch installed
        from .hf_translator import HuggingFaceTranslator
        return HuggingFaceTranslator(
            model_template=config.get('translation_model_template', 'Helsinki-NLP/opus-mt-{source}-{target}'),
            device=config.get('device', 'cuda')
        )
    raise ConfigurationError(f"Unsupported translation backend '{backend}' specified in config.")

def build_catalog(config: dict) -> VideoCatalog:
    """Creates the video catalog named by config['catalog']."""
    kind = str(config.get('catalog', 'local')).lower()
    if kind == 'local':
        return LocalVideoCatalog(config.get('catalog_root', 'videos'))
    if kind == 'http':
        url = config.get('catalog_url')
        if not url:
            raise ConfigurationError("HTTP catalog selected but no 'catalog_url' (or AUTOCC_CATALOG_URL) is set.")
        return HTTPVideoCatalog(url, timeout=float(config.get('request_timeout_seconds', 30)))
    raise ConfigurationError(f"Unsupported catalog '{kind}' specified in config.")

def build_pipeline(config: dict) -> TranslationPipeline:
    max_workers = config.get('max_workers')
    orchestrator = TranslationOrchestrator(
        build_translator(config),
        max_workers=int(max_workers) if max_workers else None
    )
    return TranslationPipeline(
        catalog=build_catalog(config),
        orchestrator=orchestrator,
        separator=config.get('metadata_separator', ';')
    )

def resolve_target_languages(translator: Translator, targets: List[str]) -> List[str]:
    """
    Returns the configured targets, or every language the backend supports when none are set.

    Raises:
        ConfigurationError: If no targets are set and the backend cannot list its languages.
    """
    if targets:
        return list(targets)
    supported_languages = getattr(translator, 'supported_languages', None)
    if supported_languages is None:
        raise ConfigurationError(
            f"No target languages given (use -t or 'target_languages' in config) "
            f"and {type(translator).__name__} cannot list its supported languages."
        )
    languages = supported_languages()
    logger.info(f"No target languages configured; using all {len(languages)} supported by the backend.")
    return languages

def run_flows(
    pipeline: TranslationPipeline,
    video_id: str,
    flow: str,
    target_languages: List[str],
    source_language: Optional[str] = None
) -> List[FlowReport]:
    """Runs the requested flow(s) for one video."""
    if flow == METADATA_FLOW:
        return [pipeline.translate_metadata(video_id, target_languages)]
    if flow == CAPTIONS_FLOW:
        if not source_language:
            source_language = pipeline.catalog.fetch_metadata(video_id).language
        return [pipeline.translate_captions(video_id, source_language, target_languages)]
    return pipeline.translate_video(video_id, target_languages)

def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by the single-video and batch entry points."""
    parser.add_argument(
        "-t", "--target-lang",
        action="append",
        default=None,
        help="Target language code. Repeat for several languages. Defaults to 'target_languages' from config, then to every language the backend supports."
    )
    parser.add_argument(
        "--source-lang",
        default=None,
        help="Caption source language (captions flow only). Defaults to the video's metadata language."
    )
    parser.add_argument(
        "--flow",
        default=ALL_FLOWS,
        choices=[ALL_FLOWS, CAPTIONS_FLOW, METADATA_FLOW],
        help="Which parts of the video to translate."
    )
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level for console and file output."
    )
    parser.add_argument(
        "--backend",
        default=None, # Default taken from config
        choices=["huggingface", "deepl"],
        help="Override the translation backend specified in config."
    )
    parser.add_argument(
        "--device",
        default=None, # Default taken from config
        choices=["cuda", "cpu"],
        help="Override the processing device (cuda or cpu) specified in config."
    )

def load_settings(args: argparse.Namespace, default_log_file: str) -> dict:
    """
    Sets up logging, loads config and applies CLI overrides.

    Exits the process with status 1 when the configuration cannot be loaded.
    """
    log_level = getattr(logging, args.log_level.upper(), logging.INFO)

    # Temporarily setup basic logging to catch config loading errors
    setup_logging(log_level=log_level, log_dir=None)

    try:
        config = ConfigLoader().load_config(args.config)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.critical(f"Failed to load configuration from {args.config}: {e}")
        sys.exit(1)

    setup_logging(
        log_level=log_level,
        log_dir=config.get('log_dir', 'logs'),
        log_file=config.get('log_file', default_log_file)
    )

    if args.backend:
        logger.info(f"Overriding backend from config with CLI argument: {args.backend}")
        config['backend'] = args.backend
    if args.device:
        logger.info(f"Overriding device from config with CLI argument: {args.device}")
        config['device'] = args.device
    if args.target_lang:
        config['target_languages'] = args.target_lang
    return config


class CLIHandler:
    """Parses arguments and runs the translation flows for one video."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="AutoCC: Translate a video's captions, title and description into many languages.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-v", "--video-id",
            required=True,
            help="Catalog id of the video to translate."
        )
        add_common_arguments(parser)
        return parser

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Parses arguments, sets up logging, loads config and runs the pipeline."""
        args = self.parser.parse_args(argv)
        config = load_settings(args, default_log_file='autocc.log')

        try:
            logger.info("Initializing AutoCC components...")
            pipeline = build_pipeline(config)
            logger.info("Components initialized successfully.")

            targets = resolve_target_languages(pipeline.orchestrator.translator, config['target_languages'])
            reports = run_flows(pipeline, args.video_id, args.flow, targets, args.source_lang)
        except AutoCCError as e:
            logger.error(f"An AutoCC error occurred: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2) # Use a different exit code for unexpected crashes

        if all(report.ok for report in reports):
            logger.info("AutoCC finished successfully.")
            sys.exit(0)
        logger.warning("AutoCC finished with failed languages.")
        sys.exit(1)

def main() -> None:
    CLIHandler().run()
