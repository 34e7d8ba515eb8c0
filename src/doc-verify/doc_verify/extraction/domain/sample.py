"""Sample domain value objects — one code sample and the output its article claims."""

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict

SampleId: TypeAlias = str


class Expectation(BaseModel, frozen=True):
    """The documented result of running a sample.

    ``lines`` are the expected stdout lines; ``error`` is the documented
    uncaught error (``"TypeError"`` or ``"TypeError: x is not a function"``),
    if the article says the sample throws.
    """

    lines: list[str] = []
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines and self.error is None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class Sample(BaseModel, frozen=True):
    """Immutable value object for one extracted code sample.

    ``sample_id`` is ``<article name>:<line of the opening fence>`` and is
    unique within a run. ``requires`` lists the capabilities the sample assumes
    (e.g. ``dom``); ``skip`` is set when the article marks the block as not
    runnable.
    """

    model_config = ConfigDict(frozen=True)

    sample_id: SampleId
    article: str
    line: int
    language: str
    source: str
    expectation: Expectation
    requires: frozenset[str] = frozenset()
    skip: bool = False
