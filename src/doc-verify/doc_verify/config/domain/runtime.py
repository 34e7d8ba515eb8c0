"""Runtime configuration model — how samples of one language are executed."""

from pydantic import BaseModel, Field


class RuntimeConfig(BaseModel, frozen=True):
    """Command used to evaluate samples of one language.

    The sample source is written to the process's stdin. ``aliases`` are the
    fence info-string languages that select this runtime; ``comment_prefix``
    is the line-comment marker used by expectation annotations.
    ``capability_hints`` maps a capability name to regular expressions; a
    sample whose source matches one is treated as requiring that capability.
    """

    command: list[str] = Field(min_length=1)
    aliases: list[str] = Field(min_length=1)
    comment_prefix: str = Field(min_length=1)
    env: dict[str, str] = {}
    capability_hints: dict[str, list[str]] = {}
