from .config import ChartConfig, load_chart_config, validate_config
from .errors import ChartConfigError
from .events import InputEvent, PointerLeave, PointerMove, Resize
from .export import export_png
from .scheduler import RepeatingTask, Scheduler
from .session import ChartSession
from .tick_driver import TickDriver
from .window_matrix import FrameCommitted, FullRewrite, WindowMatrix, WriteBatch

__all__ = [
    "ChartConfig",
    "ChartConfigError",
    "ChartSession",
    "FrameCommitted",
    "FullRewrite",
    "InputEvent",
    "PointerLeave",
    "PointerMove",
    "RepeatingTask",
    "Resize",
    "Scheduler",
    "TickDriver",
    "WindowMatrix",
    "WriteBatch",
    "export_png",
    "load_chart_config",
    "validate_config",
]
