"""YAML config loader — parses, interpolates env vars, merges defaults, validates."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from doc_verify.config.domain.config import VerifyConfig
from doc_verify.config.domain.observer import ConfigObserver
from doc_verify.config.infrastructure.defaults import default_config_data
from doc_verify.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from doc_verify.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

_LONG_TIMEOUT_SECONDS = 60.0


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a VerifyConfig."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path | None = None) -> VerifyConfig:
        """
        Return the VerifyConfig described by the YAML file at path.

        Values in the file are merged over the built-in defaults, so a file
        only needs the keys it changes. With no path the defaults are used.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the merged config violates the schema.
        """
        if path is None:
            cfg = _build_config(resolved=default_config_data())
            source = "builtin"
        else:
            raw = _parse_yaml(path=path)
            _check_missing_env_vars(raw=raw)
            merged = _merge(base=default_config_data(), override=interpolate(raw))
            cfg = _build_config(resolved=_apply_executables(merged=merged))
            source = str(path)

        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(name=cfg.name, version=cfg.version, source=source)
        return cfg


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(path=path, reason="top level must be a mapping")
    return data


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _merge(base: Any, override: Any) -> Any:
    """Deep-merge override into base. Mappings merge key by key; anything else replaces."""
    if isinstance(base, dict) and isinstance(override, dict):
        merged = dict(base)
        for key, value in override.items():
            merged[key] = _merge(base=base.get(key), override=value)
        return merged
    return override


def _apply_executables(merged: dict[str, Any]) -> dict[str, Any]:
    """
    Replace command[0] with a runtime's ``executable`` shorthand, if given.

    Lets a config point a built-in runtime at another interpreter binary while
    keeping its driver arguments.
    """
    runtimes: dict[str, Any] = merged.get("runtimes") or {}
    resolved: dict[str, Any] = {}
    for name, runtime in runtimes.items():
        if isinstance(runtime, dict) and "executable" in runtime:
            runtime = dict(runtime)
            executable = runtime.pop("executable")
            command = list(runtime.get("command") or [])
            runtime["command"] = [executable, *command[1:]]
        resolved[name] = runtime
    return {**merged, "runtimes": resolved}


def _build_config(resolved: Any) -> VerifyConfig:
    try:
        return VerifyConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: VerifyConfig, observer: ConfigObserver) -> None:
    if cfg.execution.timeout_seconds > _LONG_TIMEOUT_SECONDS:
        observer.config_long_timeout_warning(cfg.execution.timeout_seconds)
