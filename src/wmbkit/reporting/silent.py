from __future__ import annotations

from .base import Reporter


class SilentReporter(Reporter):
    """``-r silent``: keeps the base no-op hooks, so only stdout output remains."""
