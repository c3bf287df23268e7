"""Crawl configuration for the dictionary word collector."""

import string

# The source letter list leaves out 'w'. That may be a bug; confirm with the
# product owner before adding it.
# Keep this explicit rather than deriving it from string.ascii_lowercase.
LETTERS = tuple(c for c in string.ascii_lowercase if c != 'w')


class Config:
    """Configuration class for crawling the dictionary browse pages."""

    # Site layout
    BASE_URL = 'https://www.merriam-webster.com'
    BROWSE_PATH = '/browse/dictionary/'
    ENTRIES_CLASS = 'entries'
    LETTERS = LETTERS

    # Request Configuration
    REQUEST_TIMEOUT = 15
    MAX_RETRIES = 3
    RETRY_BACKOFF_FACTOR = 1
    REQUEST_DELAY = 0.5  # Seconds between page fetches
    USER_AGENT = 'WordCollector/1.0 (+https://example.com/contact)'

    # Crawl limits
    MAX_PAGES_PER_LETTER = None  # None means follow pagination to the end
    ABORT_ON_FAILURE = False

    # Output Configuration
    OUTPUT_FILE = None
    LOG_FILE = 'word_collector.log'

    @classmethod
    def validate(cls):
        """Validate configuration settings."""
        if cls.REQUEST_TIMEOUT is not None and cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")
        if cls.MAX_RETRIES < 0:
            raise ValueError("MAX_RETRIES cannot be negative")
        if cls.REQUEST_DELAY < 0:
            raise ValueError("REQUEST_DELAY cannot be negative")
        if cls.MAX_PAGES_PER_LETTER is not None and cls.MAX_PAGES_PER_LETTER <= 0:
            raise ValueError("MAX_PAGES_PER_LETTER must be positive")
        if not cls.LETTERS:
            raise ValueError("LETTERS cannot be empty")
        for letter in cls.LETTERS:
            if len(letter) != 1 or letter not in string.ascii_lowercase:
                raise ValueError(f"Invalid browse letter: {letter!r}")
