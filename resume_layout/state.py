from typing import Optional

from .geometry import PageGeometry
from .surface import DrawOp, LayoutDocument


class PageState:
    """Layout cursor for a single render.

    Owns the surface being drawn on. One instance per render; never shared.
    """

    def __init__(self, geometry: PageGeometry, surface: LayoutDocument, cursor_y: Optional[float] = None):
        self.geometry = geometry
        self.surface = surface
        self.page_index = 1
        self.cursor_y = geometry.margins.top if cursor_y is None else cursor_y

    def __repr__(self):
        return f"PageState(page_index={self.page_index}, cursor_y={self.cursor_y:.2f})"

    @property
    def page_is_empty(self) -> bool:
        return not self.surface.page(self.page_index).ops

    def has_space(self, required_height: float) -> bool:
        return self.geometry.has_space(self.cursor_y, required_height)

    def page_break(self) -> None:
        self.surface.add_page()
        self.page_index += 1
        self.cursor_y = self.geometry.margins.top

    def advance(self, height: float) -> None:
        self.cursor_y += height

    def draw(self, op: DrawOp) -> None:
        self.surface.draw(self.page_index, op)
