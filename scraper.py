"""
Dictionary Browse Page Scraper
Walks the paginated browse listing for one letter and collects the entries
that pass the word shape filters.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import Config
from word_filters import FilterConfig, filter_tokens


class PageFetchError(Exception):
    """A browse page could not be fetched (transport error or non-200 status)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass
class LetterResult:
    """Outcome of walking one letter. ``error`` is set when the walk stopped on a failed fetch."""
    letter: str
    words: List[str] = field(default_factory=list)
    pages_fetched: int = 0
    tokens_seen: int = 0
    error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.error is None


class BrowsePageScraper:
    def __init__(self, config=Config, session: Optional[requests.Session] = None):
        """
        Initialize the scraper.

        Args:
            config: Config class (or subclass) with the site and request settings
            session: Optional pre-built session, mainly for tests
        """
        self.config = config
        self.session = session if session is not None else self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry strategy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.config.MAX_RETRIES,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=self.config.RETRY_BACKOFF_FACTOR
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'User-Agent': self.config.USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })

        return session

    def page_path(self, letter: str, page_num: int = 1) -> str:
        """Site-relative path of a browse page. Page 1 has no number in its path."""
        if page_num == 1:
            return f"{self.config.BROWSE_PATH}{letter}"
        return f"{self.config.BROWSE_PATH}{letter}/{page_num}"

    def fetch_page(self, url: str) -> str:
        """Fetch a browse page and return its HTML, raising PageFetchError on failure."""
        try:
            response = self.session.get(url, timeout=self.config.REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise PageFetchError(url, str(e)) from e

        if response.status_code != 200:
            raise PageFetchError(url, f"HTTP {response.status_code}")

        return response.text

    def extract_tokens(self, soup: BeautifulSoup) -> List[str]:
        """Pull one raw token per non-empty line out of every entries block."""
        tokens = []
        for block in soup.find_all(class_=self.config.ENTRIES_CLASS):
            for line in block.get_text().split('\n'):
                line = line.strip()
                if line:
                    tokens.append(line)
        return tokens

    def find_next_page_link(self, soup: BeautifulSoup, letter: str, page_num: int) -> Optional[str]:
        """Return the href of the link to ``page_num`` if the page has one."""
        expected = self.page_path(letter, page_num)
        for a_tag in soup.find_all('a', href=True):
            if a_tag['href'] == expected:
                return a_tag['href']
        return None

    def walk_letter(self, letter: str, filters: FilterConfig) -> LetterResult:
        """
        Follow the browse pages for ``letter`` until no next-page link is found.

        A failed fetch ends the walk and is reported through ``LetterResult.error``;
        words accepted from earlier pages are kept on the result.
        """
        result = LetterResult(letter=letter)
        page_num = 1
        url = self.config.BASE_URL + self.page_path(letter, page_num)

        logging.info(f"Walking browse pages for '{letter}'")

        while True:
            if result.pages_fetched and self.config.REQUEST_DELAY:
                time.sleep(self.config.REQUEST_DELAY)

            try:
                html_content = self.fetch_page(url)
            except PageFetchError as e:
                logging.error(f"Failed to fetch page {page_num} of '{letter}': {e}")
                result.error = str(e)
                return result

            result.pages_fetched += 1
            soup = BeautifulSoup(html_content, 'html.parser')

            tokens = self.extract_tokens(soup)
            result.tokens_seen += len(tokens)
            result.words.extend(filter_tokens(tokens, filters))

            if result.pages_fetched % 10 == 0:
                logging.info(f"'{letter}': {result.pages_fetched} pages, {len(result.words)} words so far")

            next_link = self.find_next_page_link(soup, letter, page_num + 1)
            if next_link is None:
                break

            max_pages = self.config.MAX_PAGES_PER_LETTER
            if max_pages is not None and result.pages_fetched >= max_pages:
                logging.warning(f"Page limit of {max_pages} reached for '{letter}'")
                break

            page_num += 1
            url = self.config.BASE_URL + next_link

        logging.info(f"Finished '{letter}': {result.pages_fetched} pages, {len(result.words)} words")
        return result
