"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, version: str, source: str) -> None:
        self._log.info("config.loaded", name=name, version=version, source=source)

    def config_long_timeout_warning(self, timeout_seconds: float) -> None:
        self._log.warning(
            "config.long_timeout_warning",
            timeout_seconds=timeout_seconds,
            message="A hanging sample will hold a worker for the whole timeout",
        )
