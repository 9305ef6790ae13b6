"""Shell-style path matching where wildcards stop at ``/``.

``fnmatch`` lets ``*`` cross directory separators, which would make
``var/backups/mysql/daily/*.sql.gz`` match dumps nested one level deeper.
Patterns are translated to anchored regular expressions instead:

- ``*`` matches any run of non-``/`` characters
- ``?`` matches a single non-``/`` character
- ``[...]`` is a character class (``^`` negates, ``a-z`` ranges), never ``/``
- ``\\`` escapes the next character
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Optional, Sequence


class BadPattern(ValueError):
    pass


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] == "^":
        negate = True
        i += 1
    parts: list[str] = []
    first = True
    while True:
        if i >= len(pattern):
            raise BadPattern(f"unterminated character class in {pattern!r}")
        ch = pattern[i]
        if ch == "]" and not first:
            i += 1
            break
        first = False
        if ch == "\\":
            i += 1
            if i >= len(pattern):
                raise BadPattern(f"trailing backslash in {pattern!r}")
            ch = pattern[i]
        lo = ch
        i += 1
        if i + 1 < len(pattern) and pattern[i] == "-" and pattern[i + 1] != "]":
            hi = pattern[i + 1]
            i += 2
            if hi == "\\":
                if i >= len(pattern):
                    raise BadPattern(f"trailing backslash in {pattern!r}")
                hi = pattern[i]
                i += 1
            if hi < lo:
                raise BadPattern(f"bad range {lo}-{hi} in {pattern!r}")
            parts.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            parts.append(re.escape(lo))
    body = "".join(parts)
    if negate:
        return f"[^/{body}]", i
    return f"(?!/)[{body}]", i


@lru_cache(maxsize=128)
def compile_glob(pattern: str) -> "re.Pattern[str]":
    """Compile ``pattern``; raise BadPattern when it is malformed."""
    out: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            out.append("[^/]*")
            i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "[":
            fragment, i = _translate_class(pattern, i)
            out.append(fragment)
        elif ch == "\\":
            if i + 1 >= len(pattern):
                raise BadPattern(f"trailing backslash in {pattern!r}")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(ch))
            i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def glob_match(pattern: str, path: str) -> bool:
    return compile_glob(pattern).match(path) is not None


def first_match(patterns: Sequence[str], path: str) -> Optional[str]:
    """Return the first pattern in ``patterns`` matching ``path``."""
    for pattern in patterns:
        if glob_match(pattern, path):
            return pattern
    return None


def validate_globs(patterns: Iterable[str]) -> None:
    for pattern in patterns:
        compile_glob(pattern)
