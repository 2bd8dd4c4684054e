from __future__ import annotations


class ChartConfigError(ValueError):
    """Raised when chart configuration cannot be loaded or fails validation."""
