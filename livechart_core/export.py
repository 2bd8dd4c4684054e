from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

LOGGER = logging.getLogger(__name__)
DEFAULT_EXPORT_NAME = "chart.png"


def export_png(rgba: np.ndarray, path: str | Path = DEFAULT_EXPORT_NAME) -> Path:
    """Write an (H, W, 4) uint8 RGBA array to a PNG file."""
    if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("rgba must be uint8 with shape (H, W, 4)")
    out = Path(path)
    if out.parent and not out.parent.exists():
        out.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(rgba)).save(out, format="PNG")
    LOGGER.info("chart exported to %s (%dx%d)", out, rgba.shape[1], rgba.shape[0])
    return out
