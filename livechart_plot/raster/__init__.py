from .canvas import blend_mask, blit, clear, draw_hline, draw_vline, fill_rect, new_canvas, with_alpha
from .draw_lines import draw_polyline
from .draw_markers import draw_markers, fill_circle
from .draw_shapes import fill_polygon
from .draw_text import draw_text, draw_text_lines, line_height, text_size

__all__ = [
    "blend_mask",
    "blit",
    "clear",
    "draw_hline",
    "draw_markers",
    "draw_polyline",
    "draw_text",
    "draw_text_lines",
    "draw_vline",
    "fill_circle",
    "fill_polygon",
    "fill_rect",
    "line_height",
    "new_canvas",
    "text_size",
    "with_alpha",
]
