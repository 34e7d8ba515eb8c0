"""Parsing of fence info strings and expectation annotations inside samples.

An annotation is a line comment, written with the runtime's comment prefix,
that starts with one of the markers below::

    console.log(2 + 2); // => 4
    // -> second line of output
    // Output: third line
    JSON.parse("{");    // throws: SyntaxError

The text after the marker is one literal line of expected output, or the
documented error for ``throws:``.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

_SKIP_FLAGS = frozenset({"skip", "no-run", "norun", "ignore"})
_REQUIRES_KEY = "requires"


@dataclass(frozen=True)
class FenceInfo:
    """A parsed fence info string: ``js skip requires=dom,timers``."""

    language: str
    skip: bool = False
    requires: frozenset[str] = frozenset()


@dataclass
class Annotations:
    """Expectation lines, documented error, and capabilities found in a run of lines."""

    lines: list[str] = field(default_factory=list)
    error: str | None = None
    requires: set[str] = field(default_factory=set)

    @property
    def found(self) -> bool:
        return bool(self.lines) or self.error is not None

    def extend(self, other: "Annotations") -> None:
        self.lines.extend(other.lines)
        if other.error is not None:
            self.error = other.error
        self.requires.update(other.requires)


class InvalidFenceInfo(ValueError):
    """The info string names a runnable language but cannot be understood."""


def parse_fence_info(info: str) -> FenceInfo:
    """Parse a fence info string into language, skip flag and required capabilities.

    Raises:
        InvalidFenceInfo: if a ``requires=`` attribute names no capability.
    """
    tokens = info.split()
    if not tokens:
        return FenceInfo(language="")

    language = tokens[0].lower()
    skip = False
    requires: set[str] = set()
    for token in tokens[1:]:
        if token.lower() in _SKIP_FLAGS:
            skip = True
            continue
        key, sep, value = token.partition("=")
        if sep and key.lower() == _REQUIRES_KEY:
            capabilities = _split_capabilities(value)
            if not capabilities:
                raise InvalidFenceInfo(f"'{token}' names no capability")
            requires.update(capabilities)

    return FenceInfo(language=language, skip=skip, requires=frozenset(requires))


def _split_capabilities(value: str) -> set[str]:
    return {cap.strip().lower() for cap in value.split(",") if cap.strip()}


class AnnotationParser:
    """Recognises annotation comments for one comment prefix (``//``, ``#``, ...)."""

    def __init__(self, comment_prefix: str) -> None:
        prefix = re.escape(comment_prefix)
        self._annotation = re.compile(
            rf"{prefix}\s*"
            r"(?:(?P<output>=>|->|→|output:)|(?P<throws>throws|raises):)"
            r" ?(?P<value>.*)$",
            re.IGNORECASE,
        )
        self._requires = re.compile(
            rf"^\s*{prefix}\s*@requires\s+(?P<caps>.+)$", re.IGNORECASE
        )
        self._comment_only = re.compile(rf"^\s*{prefix}")

    def parse_block(self, lines: list[str]) -> Annotations:
        """Collect annotations from the lines of a code block, in order."""
        result = Annotations()
        for line in lines:
            self._parse_line(line=line, into=result)
        return result

    def parse_following(self, lines: Iterable[str]) -> Annotations:
        """Collect the leading run of annotation-only comment lines in prose after a block."""
        result = Annotations()
        for line in lines:
            if not self._comment_only.match(line):
                break
            if not self._parse_line(line=line, into=result):
                break
        return result

    def _parse_line(self, line: str, into: Annotations) -> bool:
        requires = self._requires.match(line)
        if requires:
            into.requires.update(_split_capabilities(requires.group("caps")))
            return True

        match = self._annotation.search(line)
        if match is None:
            return False
        value = match.group("value").rstrip()
        if match.group("throws"):
            into.error = value or None
        else:
            into.lines.append(value)
        return True
