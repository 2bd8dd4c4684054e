from __future__ import annotations

import numpy as np
import torch

from livechart_core.window_matrix import FullRewrite, WriteBatch


def compile_full_rewrite_batch(frame_rgba: np.ndarray) -> WriteBatch:
    """Wrap a whole RGBA frame as a single-op write batch (shares memory with `frame_rgba`)."""
    if frame_rgba.dtype != np.uint8 or frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("expected a uint8 RGBA array with shape (H, W, 4)")
    if frame_rgba.shape[0] == 0 or frame_rgba.shape[1] == 0:
        raise ValueError("RGBA array must not be empty")
    return WriteBatch([FullRewrite(torch.from_numpy(np.ascontiguousarray(frame_rgba)))])
