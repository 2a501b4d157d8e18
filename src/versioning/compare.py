"""Version ordering used to rank Conan versions newest-first.

This is a token-wise comparison, not strict semver. A version string is
split on ``.`` and ``-``; tokens are compared left to right:

- integer vs integer: numeric comparison
- missing or empty token: treated as integer ``0``
- integer vs non-integer: the integer token ranks higher
- non-integer vs non-integer: case-insensitive collation, lowercase first
  on ties (the order of a default ICU collator, so ``RC`` > ``beta``)

Pre-release style suffixes therefore sort as plain string tokens, e.g.
``1.0.0-beta`` < ``1.0.0`` but ``1.0.0-rc`` > ``1.0.0-beta``.
"""

import re
from functools import cmp_to_key
from typing import Callable, Iterable, List, Tuple, TypeVar, Union

T = TypeVar("T")

_SPLIT_RE = re.compile(r'[.-]')
_INT_RE = re.compile(r'^\d+$')

Token = Union[int, str]


def _tokenize(version: str) -> List[Token]:
    tokens: List[Token] = []
    for part in _SPLIT_RE.split(version):
        if not part:
            tokens.append(0)
        elif _INT_RE.match(part):
            tokens.append(int(part))
        else:
            tokens.append(part)
    return tokens


def _collation_key(token: str) -> Tuple[str, str]:
    # swapcase puts lowercase ahead of uppercase when the folded forms tie
    return token.casefold(), token.swapcase()


def _compare_tokens(a: Token, b: Token) -> int:
    if isinstance(a, int) and isinstance(b, int):
        return (a > b) - (a < b)
    if isinstance(a, int):
        return 1
    if isinstance(b, int):
        return -1
    if a == b:
        return 0
    a_key = _collation_key(a)
    b_key = _collation_key(b)
    return (a_key > b_key) - (a_key < b_key)


def compare_versions(a: str, b: str) -> int:
    """Return a negative, zero, or positive number as ``a`` is older, equal, or newer than ``b``."""
    a_parts = _tokenize(a)
    b_parts = _tokenize(b)
    for i in range(max(len(a_parts), len(b_parts))):
        a_part = a_parts[i] if i < len(a_parts) else 0
        b_part = b_parts[i] if i < len(b_parts) else 0
        result = _compare_tokens(a_part, b_part)
        if result:
            return result
    return 0


def sort_versions_desc(items: Iterable[T], key: Callable[[T], str] = str) -> List[T]:
    """Return ``items`` sorted newest-first by the version string ``key`` yields."""
    return sorted(
        items,
        key=cmp_to_key(lambda x, y: compare_versions(key(x), key(y))),
        reverse=True,
    )
