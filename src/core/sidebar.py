"""Sidebar visibility state.

The viewport width is an injected capability so the state machine can be
driven deterministically without a display.
"""

from typing import Protocol


# Widths below this are "narrow" (logical pixels)
NARROW_BREAKPOINT_PX = 768


class Viewport(Protocol):
    """Anything that can report the current viewport width."""

    def width(self) -> int:
        ...


class FixedViewport:
    """Viewport with a settable width, for tests and headless runs."""

    def __init__(self, width: int) -> None:
        self._width = width

    def width(self) -> int:
        return self._width

    def resize(self, width: int) -> None:
        self._width = width


class SidebarController:
    """Expanded/collapsed state of the list panel.

    On wide viewports the stored state is inert: the panel always renders
    expanded and the toggle control is unavailable.
    """

    def __init__(
        self,
        viewport: Viewport,
        breakpoint_px: int = NARROW_BREAKPOINT_PX,
    ) -> None:
        self.viewport = viewport
        self.breakpoint_px = breakpoint_px
        self.collapsed = self.is_narrow()

    def is_narrow(self) -> bool:
        return self.viewport.width() < self.breakpoint_px

    @property
    def is_expanded(self) -> bool:
        """Effective state as rendered."""
        if not self.is_narrow():
            return True
        return not self.collapsed

    @property
    def toggle_available(self) -> bool:
        return self.is_narrow()

    def toggle(self) -> None:
        """Flip the stored state unconditionally."""
        self.collapsed = not self.collapsed

    def collapse_if_narrow(self) -> bool:
        """Collapse after a selection, on narrow viewports only.

        Returns:
            True if the state changed
        """
        if not self.is_narrow() or self.collapsed:
            return False
        self.collapsed = True
        return True
