#!/usr/bin/env python3
"""
Dictionary Word Collector
Walks the dictionary's alphabetical browse listing letter by letter and
builds a filtered word list.
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

import pandas as pd

from config import Config
from scraper import BrowsePageScraper, LetterResult
from word_filters import FilterConfig

ProgressCallback = Callable[[int], None]


def configure_logging(log_file: Optional[str] = Config.LOG_FILE, level: int = logging.INFO):
    """Log to the console and, when ``log_file`` is set, to a file as well."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


class CollectionError(Exception):
    """Raised when a letter fails and the crawl is configured to abort."""

    def __init__(self, letter_result: LetterResult):
        super().__init__(f"Letter '{letter_result.letter}' failed: {letter_result.error}")
        self.letter_result = letter_result


@dataclass
class CrawlStats:
    """Statistics tracking for the crawling process."""
    letters_completed: int = 0
    letters_failed: int = 0
    pages_crawled: int = 0
    tokens_seen: int = 0
    words_accepted: int = 0


@dataclass
class CollectionResult:
    words: List[str] = field(default_factory=list)
    letter_results: List[LetterResult] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)

    @property
    def failed_letters(self) -> List[str]:
        return [r.letter for r in self.letter_results if not r.completed]


def progress_percent(done: int, total: int) -> int:
    """Whole-number percentage, rounding halves up."""
    return int(done * 100 / total + 0.5)


class DictionaryWordCollector:
    """
    Runs the letter-by-letter crawl.

    Letters are walked strictly one after another and each page fetch waits
    for the previous page to be processed.
    """

    def __init__(self, config=Config, filters: FilterConfig = FilterConfig(),
                 scraper: Optional[BrowsePageScraper] = None):
        self.config = config
        self.config.validate()
        self.filters = filters
        self.scraper = scraper if scraper is not None else BrowsePageScraper(config)

    def collect(self, on_progress: Optional[ProgressCallback] = None) -> CollectionResult:
        """Walk every configured letter and concatenate the accepted words in letter order."""
        letters = self.config.LETTERS
        result = CollectionResult()

        logging.info(f"Starting crawl of {len(letters)} letters with filters {self.filters.as_dict()}")

        for done, letter in enumerate(letters, 1):
            letter_result = self.scraper.walk_letter(letter, self.filters)
            self._record(result, letter_result)

            if not letter_result.completed and self.config.ABORT_ON_FAILURE:
                logging.error(f"Aborting crawl after failure on '{letter}'")
                raise CollectionError(letter_result)

            pct = progress_percent(done, len(letters))
            logging.info(f"Progress: {pct}% ({done}/{len(letters)} letters)")
            if on_progress is not None:
                on_progress(pct)

        if result.failed_letters:
            logging.warning(f"Letters that did not complete: {', '.join(result.failed_letters)}")

        logging.info(f"Crawling complete. Stats: {self._get_stats_summary(result.stats)}")
        return result

    def _record(self, result: CollectionResult, letter_result: LetterResult):
        result.letter_results.append(letter_result)
        result.words.extend(letter_result.words)

        stats = result.stats
        if letter_result.completed:
            stats.letters_completed += 1
        else:
            stats.letters_failed += 1
        stats.pages_crawled += letter_result.pages_fetched
        stats.tokens_seen += letter_result.tokens_seen
        stats.words_accepted = len(result.words)

    def _get_stats_summary(self, stats: CrawlStats) -> str:
        """Generate a summary of crawling statistics."""
        return (f"Letters completed: {stats.letters_completed}, "
                f"Failed: {stats.letters_failed}, "
                f"Pages crawled: {stats.pages_crawled}, "
                f"Tokens seen: {stats.tokens_seen}, "
                f"Words accepted: {stats.words_accepted}")

    def save_output(self, result: CollectionResult, filename: str):
        """Save the word list; the format follows the file extension (.json, .csv or .txt)."""
        path = Path(filename)
        suffix = path.suffix.lower()

        try:
            if suffix == '.csv':
                pd.DataFrame({"word": result.words}).to_csv(path, index=False)
            elif suffix == '.txt':
                path.write_text("".join(f"{word}\n" for word in result.words), encoding='utf-8')
            else:
                output_data = {
                    "metadata": {
                        "total_words": len(result.words),
                        "letters": list(self.config.LETTERS),
                        "failed_letters": result.failed_letters,
                        "pages_crawled": result.stats.pages_crawled,
                        "generation_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
                        "filters": self.filters.as_dict()
                    },
                    "words": result.words
                }
                with open(path, 'w', encoding='utf-8') as f:
                    json.dump(output_data, f, indent=2, ensure_ascii=False)

            logging.info(f"Results saved to: {path}")

        except OSError as e:
            logging.error(f"Error saving output file: {e}")
            raise

    def run(self, on_progress: Optional[ProgressCallback] = None) -> CollectionResult:
        """Execute the complete workflow with comprehensive logging."""
        start_time = time.time()
        logging.info("Starting word collection workflow")

        result = self.collect(on_progress)

        if self.config.OUTPUT_FILE:
            self.save_output(result, self.config.OUTPUT_FILE)

        elapsed_time = time.time() - start_time
        logging.info(f"Workflow completed in {elapsed_time:.1f} seconds")
        logging.info(f"Final word count: {len(result.words)}")

        return result


def get_words_from_merriam_webster(include_hyphenated: bool, include_proper: bool,
                                   include_phrases: bool, include_prefixes: bool,
                                   include_suffixes: bool, include_acronyms: bool,
                                   on_progress: ProgressCallback,
                                   on_complete: Callable[[List[str]], None],
                                   config=Config,
                                   scraper: Optional[BrowsePageScraper] = None) -> CollectionResult:
    """
    Collect the filtered word list for every browse letter.

    ``on_progress`` gets a 0-100 percentage after each letter and
    ``on_complete`` gets the final word list once. Letters whose pages
    could not be fetched are listed in ``failed_letters`` on the returned
    result.
    """
    filters = FilterConfig(
        include_hyphenated=include_hyphenated,
        include_proper=include_proper,
        include_phrases=include_phrases,
        include_prefixes=include_prefixes,
        include_suffixes=include_suffixes,
        include_acronyms=include_acronyms
    )
    collector = DictionaryWordCollector(config, filters, scraper=scraper)
    result = collector.collect(on_progress)
    on_complete(result.words)
    return result


def print_results(result: CollectionResult):
    """Print collection results in a formatted way."""
    print("\n" + "=" * 50)
    print("WORD COLLECTION COMPLETE")
    print("=" * 50)
    print(f"Final word count: {len(result.words):,}")
    print(f"Pages crawled: {result.stats.pages_crawled:,}")
    print(f"Sample words: {result.words[:20]}")

    if result.failed_letters:
        print("\nLetters that failed:")
        for letter_result in result.letter_results:
            if not letter_result.completed:
                print(f"  - {letter_result.letter}: {letter_result.error}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Collect a filtered word list from the dictionary browse pages')
    parser.add_argument('--hyphenated', action='store_true',
                        help='Keep hyphenated entries such as "mother-in-law"')
    parser.add_argument('--proper', action='store_true',
                        help='Keep capitalized names such as "Paris"')
    parser.add_argument('--phrases', action='store_true',
                        help='Keep entries containing spaces')
    parser.add_argument('--prefixes', action='store_true',
                        help='Keep prefix entries such as "pre-"')
    parser.add_argument('--suffixes', action='store_true',
                        help='Keep suffix entries such as "-ing"')
    parser.add_argument('--acronyms', action='store_true',
                        help='Keep acronyms such as "U.S.A." and "a.m."')
    parser.add_argument('--letters', type=str,
                        help='Only walk these letters, e.g. "abc" (default: a-z without w)')
    parser.add_argument('--output', '-o', type=str,
                        help='Output file (.json, .csv or .txt)')
    parser.add_argument('--delay', type=float, default=Config.REQUEST_DELAY,
                        help=f'Seconds between page fetches (default: {Config.REQUEST_DELAY})')
    parser.add_argument('--timeout', type=float, default=Config.REQUEST_TIMEOUT,
                        help=f'Request timeout in seconds (default: {Config.REQUEST_TIMEOUT})')
    parser.add_argument('--max-pages', type=int,
                        help='Stop each letter after this many pages')
    parser.add_argument('--abort-on-failure', action='store_true',
                        help='Stop the whole crawl when a letter fails')
    parser.add_argument('--log-file', type=str, default=Config.LOG_FILE,
                        help=f'Log file (default: {Config.LOG_FILE}); pass "" to disable')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log every rejected entry')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)

    class RunConfig(Config):
        """Per-run settings from the command line; the shared Config stays untouched."""
        REQUEST_DELAY = args.delay
        REQUEST_TIMEOUT = args.timeout
        MAX_PAGES_PER_LETTER = args.max_pages
        ABORT_ON_FAILURE = args.abort_on_failure
        OUTPUT_FILE = args.output

    if args.letters:
        RunConfig.LETTERS = tuple(args.letters.lower())

    filters = FilterConfig(
        include_hyphenated=args.hyphenated,
        include_proper=args.proper,
        include_phrases=args.phrases,
        include_prefixes=args.prefixes,
        include_suffixes=args.suffixes,
        include_acronyms=args.acronyms
    )

    def report_progress(pct: int):
        print(f"Progress: {pct}%", flush=True)

    try:
        collector = DictionaryWordCollector(RunConfig, filters)
        result = collector.run(report_progress)
    except ValueError as e:
        logging.error(f"Invalid configuration: {e}")
        return 2
    except CollectionError as e:
        logging.error(f"Application failed: {e}")
        return 1

    print_results(result)
    if args.output:
        print(f"✅ Results saved to: {args.output}")

    return 1 if result.failed_letters else 0


if __name__ == '__main__':
    sys.exit(main())
