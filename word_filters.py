"""
Word shape filters
Predicates deciding whether a scraped dictionary entry is a plain word.
"""

import logging
import re
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Iterator, Set

# U+02BD MODIFIER LETTER REVERSED COMMA, shown by the site in place of an apostrophe
MODIFIER_APOSTROPHE = 'ʽ'

DIGIT_PATTERN = re.compile(r'\d')
NON_ASCII_PATTERN = re.compile(r'[^\x00-\x7F]')

ACRONYM_PUNCTUATION = {'.', '/', '&'}


@dataclass(frozen=True)
class FilterConfig:
    """Which word shapes to keep. Everything is excluded by default."""
    include_hyphenated: bool = False
    include_proper: bool = False
    include_phrases: bool = False
    include_prefixes: bool = False
    include_suffixes: bool = False
    include_acronyms: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


def normalize_token(token: str) -> str:
    """Replace the modifier-letter apostrophe with a plain one."""
    return token.replace(MODIFIER_APOSTROPHE, "'")


def has_number(token: str) -> bool:
    return bool(DIGIT_PATTERN.search(token))


def has_unsupported_chars(token: str) -> bool:
    """Anything outside 7-bit ASCII is unsupported by the output targets."""
    return bool(NON_ASCII_PATTERN.search(token))


def is_letter(c: str) -> bool:
    return c.lower() != c.upper()


def is_uppercase_letter(c: str) -> bool:
    return is_letter(c) and c == c.upper()


def is_lowercase_letter(c: str) -> bool:
    return is_letter(c) and c == c.lower()


def is_hyphenated(token: str) -> bool:
    return '-' in token and not token.startswith('-') and not token.endswith('-')


def index_of_first_letter(token: str):
    for i, c in enumerate(token):
        if is_letter(c):
            return i
    return None


def is_proper(token: str) -> bool:
    """
    Check for a capitalized name such as "Paris" or "'Tis".

    The first letter must be uppercase and every letter after it lowercase,
    so "PARIS" is not proper.
    """
    first = index_of_first_letter(token)
    if first is None or not is_uppercase_letter(token[first]):
        return False
    return all(
        is_lowercase_letter(c)
        for c in token[first + 1:]
        if is_letter(c)
    )


def is_phrase(token: str) -> bool:
    return ' ' in token


def is_prefix(token: str) -> bool:
    return token.endswith('-')


def is_suffix(token: str) -> bool:
    return token.startswith('-')


def is_lowercase_acronym(token: str) -> bool:
    """Letters each followed by a period, e.g. "a.m." or "e.g."."""
    for i in range(0, len(token), 2):
        if i + 1 >= len(token) or not is_letter(token[i]) or token[i + 1] != '.':
            return False
    return True


def is_uppercase_acronym(token: str) -> bool:
    """Capitals with optional '.', '/', '&' and a trailing "'s", e.g. "U.S.A.'s"."""
    last = len(token) - 1
    for i, c in enumerate(token):
        if is_uppercase_letter(c) or c in ACRONYM_PUNCTUATION:
            continue
        if i == last and c == 's':
            continue
        if i == last - 1 and c == "'":
            continue
        return False
    return True


def is_acronym(token: str) -> bool:
    return is_lowercase_acronym(token) or is_uppercase_acronym(token)


# Shape name -> (predicate, FilterConfig flag that allows it), in evaluation order
SHAPE_RULES = (
    ('hyphenated', is_hyphenated, 'include_hyphenated'),
    ('proper', is_proper, 'include_proper'),
    ('phrase', is_phrase, 'include_phrases'),
    ('prefix', is_prefix, 'include_prefixes'),
    ('suffix', is_suffix, 'include_suffixes'),
    ('acronym', is_acronym, 'include_acronyms'),
)


def classify(token: str) -> Set[str]:
    """Return the names of every shape category the token matches."""
    token = normalize_token(token)
    return {name for name, predicate, _ in SHAPE_RULES if predicate(token)}


def rejection_reason(token: str, config: FilterConfig):
    """
    Return why a token would be dropped, or None if it is kept.

    Digits and non-ASCII characters always reject. Each shape rule rejects
    only when its flag in ``config`` is off.
    """
    token = normalize_token(token)

    if has_number(token):
        return 'digit'
    if has_unsupported_chars(token):
        return 'non-ascii'

    for name, predicate, flag in SHAPE_RULES:
        if not getattr(config, flag) and predicate(token):
            return name

    return None


def should_include(token: str, config: FilterConfig) -> bool:
    return rejection_reason(token, config) is None


def filter_tokens(tokens: Iterable[str], config: FilterConfig) -> Iterator[str]:
    """Yield the normalized form of each accepted token, keeping order."""
    for token in tokens:
        token = normalize_token(token)
        reason = rejection_reason(token, config)
        if reason is None:
            yield token
        else:
            logging.debug(f"Rejected {token!r}: {reason}")
