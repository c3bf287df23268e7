"""Tests for walking the paginated browse listing."""

import pytest
import requests
from bs4 import BeautifulSoup

from scraper import BrowsePageScraper, PageFetchError
from word_filters import FilterConfig


@pytest.fixture
def scraper(config, fake_session):
    return BrowsePageScraper(config, session=fake_session)


def test_page_paths(scraper):
    assert scraper.page_path('a') == '/browse/dictionary/a'
    assert scraper.page_path('a', 2) == '/browse/dictionary/a/2'
    assert scraper.page_path('q', 17) == '/browse/dictionary/q/17'


def test_extract_tokens_strips_lines_and_skips_blanks(scraper):
    html = """
    <div class="entries">
        <ul>
            <li>  apple  </li>

            <li>apple pie</li>
        </ul>
    </div>
    <div class="other">ignored</div>
    <div class="entries"><p>zebra</p></div>
    """
    soup = BeautifulSoup(html, 'html.parser')
    assert scraper.extract_tokens(soup) == ["apple", "apple pie", "zebra"]


def test_find_next_page_link_requires_exact_path(scraper, page_builder):
    html = page_builder(["apple"], links=["/browse/dictionary/a/20", "/browse/dictionary/b/2"])
    soup = BeautifulSoup(html, 'html.parser')
    assert scraper.find_next_page_link(soup, 'a', 2) is None

    html = page_builder(["apple"], links=["/browse/dictionary/a/2"])
    soup = BeautifulSoup(html, 'html.parser')
    assert scraper.find_next_page_link(soup, 'a', 2) == '/browse/dictionary/a/2'


def test_single_page_listing_halts_immediately(scraper, fake_session, page_builder, page_url):
    fake_session.pages[page_url('a')] = page_builder(["aardvark", "Aaron", "a.m.", "abacus"])
    fake_session.pages[page_url('a', 2)] = page_builder(["abandon"])

    result = scraper.walk_letter('a', FilterConfig())

    assert result.completed
    assert result.words == ["aardvark", "abacus"]
    assert result.pages_fetched == 1
    assert result.tokens_seen == 4
    assert fake_session.requested == [page_url('a')]


def test_follows_next_page_links_in_order(scraper, fake_session, page_builder, page_url):
    fake_session.pages[page_url('b')] = page_builder(["baboon", "back-up"], links=["/browse/dictionary/b/2"])
    fake_session.pages[page_url('b', 2)] = page_builder(["bacon", "B.A."], links=["/browse/dictionary/b/3"])
    fake_session.pages[page_url('b', 3)] = page_builder(["badger"], links=["/browse/dictionary/b/2"])

    result = scraper.walk_letter('b', FilterConfig(include_acronyms=True))

    assert result.completed
    assert result.words == ["baboon", "bacon", "B.A.", "badger"]
    assert result.pages_fetched == 3
    assert fake_session.requested == [page_url('b'), page_url('b', 2), page_url('b', 3)]


def test_failed_fetch_is_reported_with_partial_words(scraper, fake_session, page_builder, page_url):
    fake_session.pages[page_url('c')] = page_builder(["cabin"], links=["/browse/dictionary/c/2"])
    fake_session.pages[page_url('c', 2)] = (503, "Service Unavailable")

    result = scraper.walk_letter('c', FilterConfig())

    assert not result.completed
    assert "HTTP 503" in result.error
    assert result.words == ["cabin"]
    assert result.pages_fetched == 1


def test_transport_error_is_reported(scraper, fake_session, page_url):
    fake_session.pages[page_url('d')] = requests.exceptions.ConnectionError("connection refused")

    result = scraper.walk_letter('d', FilterConfig())

    assert not result.completed
    assert "connection refused" in result.error
    assert result.words == []
    assert result.pages_fetched == 0


def test_fetch_page_raises_on_non_200(scraper, fake_session, page_url):
    fake_session.pages[page_url('e')] = (404, "missing")
    with pytest.raises(PageFetchError) as excinfo:
        scraper.fetch_page(page_url('e'))
    assert excinfo.value.url == page_url('e')
    assert excinfo.value.reason == "HTTP 404"


def test_page_limit_stops_walk(config, fake_session, page_builder, page_url):
    config.MAX_PAGES_PER_LETTER = 2
    scraper = BrowsePageScraper(config, session=fake_session)
    fake_session.pages[page_url('f')] = page_builder(["fable"], links=["/browse/dictionary/f/2"])
    fake_session.pages[page_url('f', 2)] = page_builder(["fabric"], links=["/browse/dictionary/f/3"])
    fake_session.pages[page_url('f', 3)] = page_builder(["face"])

    result = scraper.walk_letter('f', FilterConfig())

    assert result.completed
    assert result.words == ["fable", "fabric"]
    assert len(fake_session.requested) == 2


def test_delay_between_pages(config, fake_session, page_builder, page_url, monkeypatch):
    config.REQUEST_DELAY = 0.25
    sleeps = []
    monkeypatch.setattr("scraper.time.sleep", sleeps.append)
    scraper = BrowsePageScraper(config, session=fake_session)
    fake_session.pages[page_url('g')] = page_builder(["gable"], links=["/browse/dictionary/g/2"])
    fake_session.pages[page_url('g', 2)] = page_builder(["gadget"])

    scraper.walk_letter('g', FilterConfig())

    assert sleeps == [0.25]


def test_default_session_has_retry_adapter(config):
    scraper = BrowsePageScraper(config)
    adapter = scraper.session.get_adapter("https://www.merriam-webster.com")
    assert adapter.max_retries.total == config.MAX_RETRIES
    assert scraper.session.headers['User-Agent'] == config.USER_AGENT
