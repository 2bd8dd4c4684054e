from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float
    timestamp: float = 0.0


@dataclass(frozen=True)
class PointerLeave:
    timestamp: float = 0.0


@dataclass(frozen=True)
class Resize:
    width: int
    height: int
    timestamp: float = 0.0


InputEvent: TypeAlias = PointerMove | PointerLeave | Resize
