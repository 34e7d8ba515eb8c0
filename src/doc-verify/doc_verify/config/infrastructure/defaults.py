"""Built-in configuration used when no config file is given."""

import os
from typing import Any

from doc_verify.runtime.infrastructure.drivers import (
    javascript_command,
    python_command,
)

DEFAULT_TIMEOUT_SECONDS = 5.0

# Globals that exist in browsers but not in a headless runtime.
BROWSER_ONLY_HINTS = [
    r"\bdocument\s*\.",
    r"\bwindow\s*\.",
    r"\bnavigator\s*\.",
    r"\b(?:localStorage|sessionStorage)\b",
    r"\b(?:alert|confirm|prompt)\s*\(",
]


def default_config_data() -> dict[str, Any]:
    """Return the raw (pre-validation) default configuration tree."""
    return {
        "name": "doc-verify",
        "version": "1",
        "articles": {"patterns": ["*.md", "*.markdown"], "encoding": "utf-8"},
        "capabilities": [],
        "runtimes": {
            "javascript": {
                "command": javascript_command(),
                "aliases": ["js", "javascript", "cjs", "node"],
                "comment_prefix": "//",
                "capability_hints": {"dom": BROWSER_ONLY_HINTS},
            },
            "python": {
                "command": python_command(),
                "aliases": ["py", "python", "python3"],
                "comment_prefix": "#",
            },
        },
        "execution": {
            "max_concurrent": os.cpu_count() or 1,
            "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
            "num_repetitions": 1,
            "retry": {
                "max_attempts": 3,
                "initial_backoff_seconds": 0.5,
                "backoff_multiplier": 2.0,
            },
        },
    }
