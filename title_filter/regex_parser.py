"""Lenient regex pattern parsing.

Rule settings store their regexes as JavaScript-style literals such as
``/PSA\\s?10/gi`` or as bare pattern sources. This module turns those strings
into compiled ``re`` patterns:

- ``parse_regex`` splits an optional ``/pattern/flags`` literal.
- ``to_python_pattern`` rewrites syntax that ``re`` does not understand
  (ASCII-only ``\\d``, ``\\w`` and ``\\b``, ``\\u{1F600}`` escapes, UTF-16
  surrogate pairs, ``(?<name>...)`` groups).
- ``compile_regex`` does both and compiles, caching the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


class PatternError(re.error):
    """A configured pattern could not be compiled."""

    def __init__(self, msg: str, pattern: str) -> None:
        super().__init__(f"{msg}: {pattern!r}", pattern=pattern)


@dataclass(frozen=True)
class ParsedRegex:
    pattern: str
    flags: str = ""


_LITERAL_RE = re.compile(r"(/?)(.+)\1([a-z]*)", re.IGNORECASE)
_VALID_FLAGS_RE = re.compile(r"^(?!.*?(.).*?\1)[gmixXsuUAJ]+$")

_RE_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}
# No re counterpart: re.sub/finditer are always global, str patterns are always unicode.
_NOOP_FLAGS = {"g", "u", "y", "d"}

_HI = r"[dD][89abAB][0-9a-fA-F]{2}"
_LO = r"[dD][c-fC-F][0-9a-fA-F]{2}"
_ANY_D = r"[dD][0-9a-fA-F]{3}"

_SYNTAX_RE = re.compile(
    rf"""
    \\u(?P<hi>{_HI})
        (?:\\u(?P<lo>{_LO})
          |\[\\u(?P<lo_start>{_ANY_D})-\\u(?P<lo_end>{_ANY_D})\])
    |\\u\{{(?P<codepoint>[0-9a-fA-F]{{1,6}})\}}
    |\(\?<(?P<group>[A-Za-z_][A-Za-z0-9_]*)>
    |\\k<(?P<backref>[A-Za-z_][A-Za-z0-9_]*)>
    |\\(?P<escape>.)
    |(?P<open>\[)
    |(?P<close>\])
    """,
    re.VERBOSE | re.DOTALL,
)

# \d, \w and \b only know ASCII in JavaScript; re str patterns know all of Unicode.
_WORD = "[A-Za-z0-9_]"
_ESCAPES = {
    "d": "[0-9]",
    "D": "[^0-9]",
    "w": _WORD,
    "W": "[^A-Za-z0-9_]",
    "b": f"(?:(?<={_WORD})(?!{_WORD})|(?<!{_WORD})(?={_WORD}))",
    "B": f"(?:(?<={_WORD})(?={_WORD})|(?<!{_WORD})(?!{_WORD}))",
}
_CLASS_ESCAPES = {
    "d": "0-9",
    "D": "\\x00-\\x2f\\x3a-\\U0010ffff",
    "w": "A-Za-z0-9_",
    "W": "\\x00-\\x2f\\x3a-\\x40\\x5b-\\x5e\\x60\\x7b-\\U0010ffff",
}


def double_backslashes(source: str) -> str:
    """Make every backslash in ``source`` literal."""
    return source.replace("\\", "\\\\")


def parse_regex(source: str) -> ParsedRegex:
    """Split ``/pattern/flags`` into its parts.

    A source without delimiters is returned whole with no flags. When the
    trailing letters are not a valid, non-repeating flag set the input is
    taken verbatim as the pattern.
    """
    match = _LITERAL_RE.search(source)
    if match is None:
        raise PatternError("empty pattern", source)
    flags = match.group(3)
    if flags and not _VALID_FLAGS_RE.match(flags):
        return ParsedRegex(source)
    return ParsedRegex(match.group(2), flags)


def _code_point(hi: str, lo: int) -> int:
    return 0x10000 + ((int(hi, 16) - 0xD800) << 10) + (lo - 0xDC00)


def _translate(match: re.Match, in_class: bool, unicode: bool) -> str:
    if match.group("hi"):
        hi = match.group("hi")
        if match.group("lo"):
            return "\\U%08X" % _code_point(hi, int(match.group("lo"), 16))
        start = max(int(match.group("lo_start"), 16), 0xDC00)
        end = min(int(match.group("lo_end"), 16), 0xDFFF)
        return "[\\U%08X-\\U%08X]" % (_code_point(hi, start), _code_point(hi, end))
    if match.group("codepoint"):
        if unicode:
            return "\\U%08X" % int(match.group("codepoint"), 16)
        # without the u flag this is a "u" followed by a {n} quantifier
        return "u{%s}" % match.group("codepoint")
    if match.group("group"):
        return f"(?P<{match.group('group')}>"
    if match.group("backref"):
        return f"(?P={match.group('backref')})"
    escapes = _CLASS_ESCAPES if in_class else _ESCAPES
    return escapes.get(match.group("escape"), match.group(0))


def to_python_pattern(pattern: str, unicode: bool = False) -> str:
    """Rewrite JavaScript-only regex syntax into ``re`` syntax.

    ``unicode`` is true when the pattern carries the ``u`` flag, which
    enables ``\\u{...}`` code point escapes.
    """
    parts = []
    in_class = False
    pos = 0
    for match in _SYNTAX_RE.finditer(pattern):
        parts.append(pattern[pos:match.start()])
        pos = match.end()
        if match.group("open"):
            parts.append("\\[" if in_class else "[")
            in_class = True
        elif match.group("close"):
            parts.append("]")
            in_class = False
        else:
            parts.append(_translate(match, in_class, unicode))
    parts.append(pattern[pos:])
    return "".join(parts)


def to_re_flags(flags: str, source: str = "") -> int:
    value = 0
    for flag in flags:
        if flag in _RE_FLAGS:
            value |= _RE_FLAGS[flag]
        elif flag not in _NOOP_FLAGS:
            raise PatternError(f"unsupported flag {flag!r}", source)
    return value


@lru_cache(maxsize=256)
def _compile(pattern: str, flags: int) -> re.Pattern:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternError(str(exc), pattern) from exc


def compile_regex(source: str, flags: Optional[str] = None, double: bool = False) -> re.Pattern:
    """Compile a lenient pattern string.

    Args:
        source: ``/pattern/flags`` literal or bare pattern
        flags: replaces the parsed flags when given, e.g. ``"g"``
        double: double every backslash before parsing

    Raises:
        PatternError: the pattern does not compile
    """
    if double:
        source = double_backslashes(source)
    parsed = parse_regex(source)
    effective = parsed.flags if flags is None else flags
    return _compile(to_python_pattern(parsed.pattern, "u" in effective), to_re_flags(effective, source))


def compile_native(pattern: str, flags: int = 0) -> re.Pattern:
    """Compile an already delimiter-free pattern, translating JS-only syntax."""
    return _compile(to_python_pattern(pattern), flags)
