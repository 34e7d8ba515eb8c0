"""Article discovery configuration model."""

from pydantic import BaseModel, Field


class ArticlesConfig(BaseModel, frozen=True):
    patterns: list[str] = Field(default=["*.md", "*.markdown"], min_length=1)
    encoding: str = Field(default="utf-8", min_length=1)
