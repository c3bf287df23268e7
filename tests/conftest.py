"""Pytest configuration and shared fixtures."""
import pytest
import requests

from config import Config


class FakeSession:
    """Stands in for requests.Session, serving canned pages by URL."""

    def __init__(self, pages=None):
        # url -> html string, (status_code, html) tuple, or an exception instance
        self.pages = dict(pages or {})
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        page = self.pages.get(url, (404, "Not Found"))
        if isinstance(page, Exception):
            raise page
        if isinstance(page, str):
            page = (200, page)
        status, body = page

        response = requests.Response()
        response.status_code = status
        response._content = body.encode('utf-8')
        response.encoding = 'utf-8'
        response.url = url
        return response


def browse_page(entries, links=()):
    """Render a minimal browse page with one entries list and some anchors."""
    items = "\n".join(f"    <li><a href=\"/dictionary/x\">{entry}</a></li>" for entry in entries)
    anchors = "\n".join(f"<a href=\"{href}\">{href}</a>" for href in links)
    return (
        "<html><body>\n"
        "<a href=\"/browse/dictionary/a\">A</a>\n"
        f"<div class=\"entries\">\n  <ul>\n{items}\n  </ul>\n</div>\n"
        f"<nav>{anchors}</nav>\n"
        "</body></html>"
    )


class QuietConfig(Config):
    REQUEST_DELAY = 0
    MAX_RETRIES = 0
    OUTPUT_FILE = None


@pytest.fixture
def config():
    class TestConfig(QuietConfig):
        pass
    return TestConfig


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def page_builder():
    return browse_page


@pytest.fixture
def page_url(config):
    """Absolute URL of browse page ``num`` for ``letter``."""
    def build(letter, num=1):
        if num == 1:
            return f"{config.BASE_URL}{config.BROWSE_PATH}{letter}"
        return f"{config.BASE_URL}{config.BROWSE_PATH}{letter}/{num}"
    return build
