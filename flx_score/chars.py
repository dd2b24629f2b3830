from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

WORD_SEPARATORS = frozenset(" -_:./\\")


@dataclass(frozen=True)
class CharInfo:
    folded: str
    is_upper: bool
    is_lower: bool
    is_digit: bool
    is_separator: bool
    is_alnum: bool
    is_capital: bool

    @property
    def is_word(self) -> bool:
        return not self.is_separator


@lru_cache(maxsize=4096)
def classify(ch: str) -> CharInfo:
    is_separator = ch in WORD_SEPARATORS
    return CharInfo(
        folded=ch.lower(),
        is_upper=ch.isupper(),
        is_lower=ch.islower(),
        is_digit=ch.isdigit(),
        is_separator=is_separator,
        is_alnum=ch.isalnum(),
        # Anything without a distinct uppercase form counts, digits included.
        is_capital=not is_separator and ch == ch.upper(),
    )


def fold(ch: str) -> str:
    return classify(ch).folded


def is_word(ch: str | None) -> bool:
    return ch is not None and classify(ch).is_word


def is_capital(ch: str | None) -> bool:
    return ch is not None and classify(ch).is_capital


def is_boundary(last: str | None, ch: str) -> bool:
    """Return whether *ch* starts a new word when preceded by *last*.

    ``None`` for *last* means *ch* is the first character.  Camel case
    transitions (``fooBar``) and letter-to-digit steps count as boundaries.
    """
    if last is None:
        return True
    if not is_capital(last) and is_capital(ch):
        return True
    return not is_word(last) and is_word(ch)
