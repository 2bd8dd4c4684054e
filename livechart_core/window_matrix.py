from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import itertools
import logging
import threading
import time
from typing import Sequence, TypeAlias

import torch


LOGGER = logging.getLogger(__name__)
INVALID_PIXEL = (255, 0, 255, 255)
MAX_PENDING_COMMITS = 64


@dataclass(frozen=True)
class FullRewrite:
    pixels: torch.Tensor


WriteOp: TypeAlias = FullRewrite


@dataclass(frozen=True)
class WriteBatch:
    operations: Sequence[WriteOp]


@dataclass(frozen=True)
class FrameCommitted:
    seq: int
    revision: int
    committed_ns: int


class WindowMatrix:
    """(H, W, 4) uint8 display surface updated only through whole write batches.

    A batch is staged on a copy and swapped in under the lock, so readers see
    either the previous frame or the new one. Every commit queues a
    `FrameCommitted` notice for the presenter; only the newest
    `MAX_PENDING_COMMITS` notices are kept when nobody drains them.
    """

    def __init__(self, height: int, width: int, background: tuple[int, int, int, int] = (0, 0, 0, 255)) -> None:
        self._background = torch.tensor(background, dtype=torch.uint8)
        self._lock = threading.Lock()
        self._pixels = self._blank(height, width)
        self._revision = 0
        self._seq = itertools.count(1)
        self._commits: deque[FrameCommitted] = deque(maxlen=MAX_PENDING_COMMITS)

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def revision(self) -> int:
        return self._revision

    def snapshot(self) -> torch.Tensor:
        with self._lock:
            return self._pixels.clone()

    def resize(self, height: int, width: int) -> None:
        """Reallocate at the new size; contents reset to the background colour."""
        blank = self._blank(height, width)
        with self._lock:
            if (height, width) == (self.height, self.width):
                return
            self._pixels = blank
        LOGGER.info("window matrix resized to %dx%d", width, height)

    def commit(self, batch: WriteBatch) -> FrameCommitted:
        if not batch.operations:
            raise ValueError("write batch must include at least one operation")
        with self._lock:
            staged = self._pixels.clone()
            replaced = 0
            for op in batch.operations:
                replaced += self._apply(staged, op)
            if replaced:
                LOGGER.warning("write batch replaced invalid RGBA pixels; offending_pixels=%d", replaced)
            self._pixels = staged
            self._revision += 1
            notice = FrameCommitted(seq=next(self._seq), revision=self._revision, committed_ns=time.time_ns())
            self._commits.append(notice)
        return notice

    def pop_commit(self) -> FrameCommitted | None:
        with self._lock:
            return self._commits.popleft() if self._commits else None

    def pending_commit_count(self) -> int:
        with self._lock:
            return len(self._commits)

    def _apply(self, staged: torch.Tensor, op: WriteOp) -> int:
        if isinstance(op, FullRewrite):
            pixels, replaced = _to_rgba8(op.pixels, (self.height, self.width))
            staged.copy_(pixels)
            return replaced
        raise TypeError(f"Unsupported write op: {type(op)!r}")

    def _blank(self, height: int, width: int) -> torch.Tensor:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        return self._background.repeat(height, width, 1)


def _to_rgba8(pixels: torch.Tensor, size: tuple[int, int]) -> tuple[torch.Tensor, int]:
    """Convert a pixel block to uint8 RGBA; out-of-range or non-finite pixels become magenta."""
    if not torch.is_tensor(pixels):
        raise ValueError("pixels must be a torch.Tensor")
    if tuple(pixels.shape) != (*size, 4):
        raise ValueError(f"pixel block has shape {tuple(pixels.shape)}, expected {(*size, 4)}")
    if pixels.dtype == torch.uint8:
        return pixels, 0
    if pixels.is_complex():
        raise ValueError(f"pixels must be real-valued, got {pixels.dtype}")
    values = pixels.to(torch.float64)
    bad = (~torch.isfinite(values) | (values < 0) | (values > 255)).any(dim=-1)
    out = values.nan_to_num(0.0).clamp(0, 255).to(torch.uint8)
    out[bad] = torch.tensor(INVALID_PIXEL, dtype=torch.uint8)
    return out, int(bad.sum().item())
