#!/usr/bin/env python3
"""
AutoCC Batch Processing Entry Point

Translates captions and metadata for every video id listed in a file,
continuing past videos that fail.
"""

import argparse
import logging
import sys
import time

# Progress bar library
from tqdm import tqdm

from autocc.cli import add_common_arguments, build_pipeline, load_settings, resolve_target_languages, run_flows
from autocc.exceptions import AutoCCError, FileSystemError
from autocc.utils import read_id_list

logger = logging.getLogger(__name__)


def run_batch_processing():
    """Parses arguments, sets up, and runs the batch translation."""
    parser = argparse.ArgumentParser(
        description="AutoCC Batch: Translate captions and metadata for a list of videos.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--video-ids-file",
        required=True,
        help="Text file with one video id per line ('#' starts a comment)."
    )
    add_common_arguments(parser)
    args = parser.parse_args()

    config = load_settings(args, default_log_file='autocc_batch.log')

    try:
        video_ids = read_id_list(args.video_ids_file)
    except (FileNotFoundError, FileSystemError) as e:
        logger.critical(f"Video id list error: {e}")
        sys.exit(1)
    if not video_ids:
        logger.warning(f"No video ids found in {args.video_ids_file}. Exiting.")
        sys.exit(0)

    # --- Initialize Components (ONCE) ---
    try:
        logger.info("Initializing AutoCC components for batch processing...")
        pipeline = build_pipeline(config)
        targets = resolve_target_languages(pipeline.orchestrator.translator, config['target_languages'])
        logger.info("Components initialized successfully.")
    except AutoCCError as e:
        logger.critical(f"Failed to initialize AutoCC components: {e}")
        sys.exit(1)
    except Exception as e:
        logger.critical(f"An unexpected error occurred during component initialization: {e}", exc_info=True)
        sys.exit(1)

    total = len(video_ids)
    videos_ok = 0
    videos_partial = 0
    videos_failed = 0
    batch_start_time = time.time()

    logger.info(f"--- Starting Batch Translation for {total} videos into {targets} ---")

    with tqdm(total=total, unit="video", desc="Starting Batch") as pbar:
        for video_id in video_ids:
            pbar.set_description(f"Processing: {video_id[:30]}")
            try:
                reports = run_flows(pipeline, video_id, args.flow, targets, args.source_lang)
                if all(report.ok for report in reports):
                    videos_ok += 1
                else:
                    failed = sorted({lang for report in reports for lang in report.failed_languages})
                    logger.warning(f"Video '{video_id}' finished with failed languages: {failed}")
                    videos_partial += 1
            except AutoCCError as e:
                logger.error(f"AutoCC failed for video '{video_id}': {e}")
                videos_failed += 1
            except KeyboardInterrupt:
                logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
                sys.exit(1)
            except Exception as e:
                logger.error(f"An unexpected error occurred processing '{video_id}': {e}", exc_info=True)
                videos_failed += 1
            finally:
                pbar.update(1)

    logger.info("--- Batch Translation Finished ---")
    logger.info(f"Total time: {time.time() - batch_start_time:.2f} seconds")
    logger.info(f"Fully translated: {videos_ok}/{total} videos")
    logger.info(f"Partially translated: {videos_partial}/{total} videos")
    logger.info(f"Failed: {videos_failed}/{total} videos")

    sys.exit(1 if videos_partial or videos_failed else 0)


if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("AutoCC requires Python 3.8 or later.\n")
        sys.exit(1)

    run_batch_processing()
