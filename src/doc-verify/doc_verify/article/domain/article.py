"""Article value object — the raw text of one documentation file."""

from pathlib import Path

from pydantic import BaseModel, Field


class Article(BaseModel, frozen=True):
    """Immutable value object holding one article's text.

    ``name`` is the path shown in sample ids and reports: relative to the
    directory it was discovered in, or as given on the command line.
    """

    path: Path
    name: str = Field(min_length=1)
    text: str
