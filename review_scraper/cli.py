"""
Command-line entry point.

    review-scraper restaurants.csv reviews.json [--env production] [--log-level DEBUG] [--headed]

Reads the restaurants from the input CSV, scrapes their reviews with retries,
and writes whatever was collected to the output JSON file. Exit status is 0 on
success and 1 when the input, the configuration or the scrape itself failed.
"""
import argparse
import asyncio
import sys
from typing import List, Mapping, Optional

from review_scraper.components.extractor.delays import JitterDelay
from review_scraper.components.renderer.playwright_manager import PlaywrightManager
from review_scraper.components.storage.file_storage import FileStorage
from review_scraper.components.storage.input_loader import load_entities
from review_scraper.core.config import ConfigError, ConfigurationManager, config_manager
from review_scraper.core.exceptions import RetryExhaustedError, ReviewScraperError
from review_scraper.core.logger import get_logger, setup_logging
from review_scraper.core.orchestrator import ScrapeOrchestrator
from review_scraper.core.pipeline import EntityPipeline
from review_scraper.core.retry import RetryCoordinator
from review_scraper.core.settings import ScraperSettings
from review_scraper.core.state import WorkState
from review_scraper.models.records import EntityReviews

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="review-scraper", description="Scrape restaurant reviews into a JSON file")
    p.add_argument("input", help="CSV file with Name,Ranking,Url columns")
    p.add_argument("output", help="JSON file the results are written to")
    p.add_argument("--env", type=str, default=None,
                   help="Configuration environment (default: APP_ENV or development)")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--headed", action="store_true", help="Show the browser window")
    return p


async def scrape(
    state: WorkState,
    output: str,
    config: ConfigurationManager,
    settings: ScraperSettings,
    headless: Optional[bool] = None,
    storage: Optional[FileStorage] = None,
) -> Mapping[str, EntityReviews]:
    """
    Runs the retried scrape on one browser page and checkpoints into `output`.

    Raises:
        RendererError: If the browser cannot be started.
        RetryExhaustedError: If every attempt failed (partial results are written first).
    """
    storage = storage or FileStorage(config)

    async with PlaywrightManager(config, headless=headless) as browser:
        pipeline = EntityPipeline(browser.driver, settings, JitterDelay(settings.jitter_seed))
        orchestrator = ScrapeOrchestrator(pipeline, state)
        coordinator = RetryCoordinator.from_settings(
            orchestrator,
            lambda records: storage.save_results(records, output),
            settings,
        )
        return await coordinator.run()


def run_cli(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config_manager.load_config(args.env)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    setup_logging(config_manager, level=args.log_level, force=True)

    try:
        settings = ScraperSettings.from_config(config_manager)
        entities = load_entities(args.input)
        state = WorkState(entities)
        results = asyncio.run(scrape(
            state,
            args.output,
            config_manager,
            settings,
            headless=False if args.headed else None,
        ))
    except RetryExhaustedError as e:
        logger.critical(f"Scrape aborted: {e}. Partial results were written to {args.output}.")
        return 1
    except ReviewScraperError as e:
        logger.error(f"Scrape failed: {e}")
        return 1

    logger.info(f"Saved reviews of {len(results)} restaurants to {args.output}.")
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
