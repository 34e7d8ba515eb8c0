"""Top-level VerifyConfig aggregate — the root configuration object."""

from typing import TypeAlias

from pydantic import BaseModel, Field, model_validator

from doc_verify.config.domain.articles import ArticlesConfig
from doc_verify.config.domain.execution import ExecutionConfig
from doc_verify.config.domain.runtime import RuntimeConfig

RuntimeName: TypeAlias = str
Capability: TypeAlias = str


class VerifyConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a doc-verify run."""

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    articles: ArticlesConfig = ArticlesConfig()
    runtimes: dict[RuntimeName, RuntimeConfig] = Field(min_length=1)
    capabilities: list[Capability] = []
    execution: ExecutionConfig

    @model_validator(mode="after")
    def _aliases_are_unique(self) -> "VerifyConfig":
        seen: dict[str, str] = {}
        for runtime_name, runtime in self.runtimes.items():
            for alias in runtime.aliases:
                key = alias.lower()
                if key in seen and seen[key] != runtime_name:
                    raise ValueError(
                        f"alias '{alias}' is claimed by runtimes"
                        f" '{seen[key]}' and '{runtime_name}'"
                    )
                seen[key] = runtime_name
        return self
