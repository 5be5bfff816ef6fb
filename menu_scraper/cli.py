#!/usr/bin/env python3
"""CLI entry point for the restaurant menu scraper."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sqlite3
import sys
import time
from pathlib import Path
from typing import Callable

from .config import FETCH_MODES, Config
from .db import MenuDatabase
from .extraction import DEFAULT_PATTERNS, SelectorPatterns
from .models import ScrapeResult
from .scrapers import (
    BaseScraper,
    ScraperError,
    get_scraper_display_name,
    get_scraper_for_url,
    list_scrapers,
)
from .scrapers.browser_pool import BrowserPool

logger = logging.getLogger(__name__)

ScraperFactory = Callable[[str, Config, SelectorPatterns], BaseScraper]


def _default_factory(url: str, config: Config, patterns: SelectorPatterns) -> BaseScraper:
    return get_scraper_for_url(url, config=config, patterns=patterns)


def print_result(result: ScrapeResult) -> None:
    """Print scrape result summary."""
    info = result.restaurant
    print(f"\n[{info.name}] {result.source_url}")
    print(f"  rating: {info.rating} ({info.review_count} ratings)")
    print(f"  delivery: {info.delivery_fee} / {info.delivery_time}")
    print(f"  {len(result.categories)} categories, {len(result.items)} items")
    for i, item in enumerate(result.items[:5], 1):
        print(f"  {i}. [{item.category}] {item.name} - {item.price}")
    if len(result.items) > 5:
        print(f"  ... and {len(result.items) - 5} more")


def _store(scraper: BaseScraper, result: ScrapeResult, db: MenuDatabase | None) -> None:
    scraper.save_results(result)
    if db is not None:
        db.save_results(result)


async def run_url(
    url: str,
    config: Config,
    patterns: SelectorPatterns,
    db: MenuDatabase | None,
    factory: ScraperFactory = _default_factory,
) -> ScrapeResult | None:
    """Scrape one URL. A failed page is logged and yields None."""
    scraper = factory(url, config, patterns)
    try:
        result = await scraper.scrape(url)
    except ScraperError as exc:
        logger.error("[%s] Giving up on %s: %s", scraper.name, url, exc)
        return None
    except Exception:
        logger.exception("[%s] Unexpected error while scraping %s", scraper.name, url)
        return None

    print_result(result)
    try:
        _store(scraper, result, db)
    except (OSError, sqlite3.Error) as exc:
        logger.error("[%s] Could not store results for %s: %s", scraper.name, url, exc)
        return None
    return result


async def run_batch(
    urls: list[str],
    config: Config,
    patterns: SelectorPatterns,
    db: MenuDatabase | None,
    factory: ScraperFactory = _default_factory,
) -> list[ScrapeResult]:
    """Scrape URLs in parallel, at most ``config.concurrency`` at a time."""
    print(f"Running {len(urls)} page(s), {config.concurrency} at a time...")
    start = time.perf_counter()
    slots = asyncio.Semaphore(config.concurrency)

    async def run_slot(url: str) -> ScrapeResult | None:
        async with slots:
            return await run_url(url, config, patterns, db, factory)

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(run_slot(url)) for url in urls]
    finally:
        await BrowserPool.shutdown()

    results = [result for task in tasks if (result := task.result()) is not None]
    elapsed = time.perf_counter() - start
    print(f"\n{len(results)}/{len(urls)} page(s) scraped in {elapsed:.2f}s")
    return results


def run_offline(
    html_file: Path,
    url: str,
    config: Config,
    patterns: SelectorPatterns,
    db: MenuDatabase | None,
    factory: ScraperFactory = _default_factory,
) -> ScrapeResult:
    """Extract a saved HTML page without opening a browser."""
    scraper = factory(url, config, patterns)
    result = scraper.scrape_html(html_file.read_text(encoding="utf-8"), url)
    print_result(result)
    _store(scraper, result, db)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Restaurant menu scraper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m menu_scraper.cli --url https://www.grubhub.com/restaurant/x/123   # Scrape one page
  python -m menu_scraper.cli --url URL1 URL2 --concurrency 2                 # Scrape several pages
  python -m menu_scraper.cli --html saved.html --url URL                     # Extract a saved page
  python -m menu_scraper.cli --list                                          # List available scrapers
        """,
    )
    parser.add_argument("--url", "-u", nargs="+", help="Restaurant page URL(s); defaults to MENU_SCRAPER_URL")
    parser.add_argument("--html", type=Path, help="Extract a saved HTML file instead of navigating")
    parser.add_argument("--list", "-l", action="store_true", help="List available scrapers")
    parser.add_argument("--max-retries", type=int, help="Navigation retries per page")
    parser.add_argument("--debug", action="store_true", default=None, help="Save debug screenshots, verbose logs")
    parser.add_argument("--concurrency", "-c", type=int, help="Pages scraped in parallel")
    parser.add_argument("--fetch-mode", choices=FETCH_MODES, help="Load pages with a browser or plain HTTP")
    parser.add_argument("--patterns", type=Path, help="JSON file overriding the selector lists")
    parser.add_argument("--output-dir", type=Path, help="Directory for JSON/CSV output")
    parser.add_argument("--no-db", action="store_true", help="Do not write results to the SQLite database")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        print("Available scrapers:")
        for name in list_scrapers():
            print(f"  - {name} ({get_scraper_display_name(name)})")
        return 0

    try:
        config = Config.from_env().with_overrides(
            max_retries=args.max_retries,
            debug=args.debug,
            concurrency=args.concurrency,
            fetch_mode=args.fetch_mode,
            patterns_file=args.patterns,
            output_dir=args.output_dir,
        )
        patterns = SelectorPatterns.from_file(config.patterns_file) if config.patterns_file else DEFAULT_PATTERNS
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    urls = args.url or list(config.restaurant_urls)
    if not urls:
        print("Error: no URL given (use --url or set MENU_SCRAPER_URL)", file=sys.stderr)
        return 1

    db = None if args.no_db else MenuDatabase(config.db_path)

    if args.html:
        if len(urls) != 1:
            print("Error: --html needs exactly one --url", file=sys.stderr)
            return 1
        try:
            run_offline(args.html, urls[0], config, patterns, db)
        except (OSError, sqlite3.Error) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    results = asyncio.run(run_batch(urls, config, patterns, db))

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)
    return 0 if results else 1


if __name__ == "__main__":
    sys.exit(main())
