"""Input orchestration for the board editor.

Host events (pointer move/up, wheel, viewport resize) arrive here and are the
only way the :class:`EditorView` changes. Each gesture works on a cheap copy of
the current view and swaps it in, so listeners can compare old and new views by
identity to skip redundant work.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterator, Optional, Tuple

from board import EditorView, PanelKind, ViewTransform

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

BUTTON_LEFT = 1
BUTTON_MIDDLE = 2
BUTTON_RIGHT = 3


@dataclass(frozen=True)
class PointerButtons:
    """Held-button bitmask as reported with pointer moves."""

    mask: int = 0

    @classmethod
    def from_pressed(cls, left: bool = False, right: bool = False, middle: bool = False) -> "PointerButtons":
        return cls((1 if left else 0) | (2 if right else 0) | (4 if middle else 0))

    @property
    def left(self) -> bool:
        return self.mask & 1 > 0

    @property
    def right(self) -> bool:
        return self.mask & 2 > 0

    @property
    def middle(self) -> bool:
        return self.mask & 4 > 0


class EditorController:
    """Applies pointer, wheel and resize input to an editor view."""

    def __init__(
        self,
        view: EditorView,
        *,
        zoom_step: float = 1.1,
        on_update: Optional[Callable[[EditorView], None]] = None,
    ) -> None:
        if zoom_step <= 1.0:
            raise ValueError(f"zoom_step must be greater than 1, got {zoom_step}")
        self.view = view
        self.zoom_step = zoom_step
        self.on_update = on_update
        self._last_pos: Optional[Point] = None
        self._pending = False
        self._erased = False

    # --- host events -------------------------------------------------------

    def pointer_move(self, pos: Point, buttons: PointerButtons) -> bool:
        """Pan while right/middle is held, paint or clear while left is held."""
        last, self._last_pos = self._last_pos, pos
        if buttons.right or buttons.middle:
            if last is None:
                return False
            view = self.view.copy()
            view.pan((pos[0] - last[0], pos[1] - last[1]))
            return self._stage(view)
        if buttons.left:
            if self.view.selected is PanelKind.EMPTY:
                return self._clear(pos)
            return self._paint(pos)
        return False

    def pointer_up(self, pos: Point, button: int, shift: bool = False, click: bool = True) -> bool:
        """Finish a gesture and publish what it changed.

        A left click paints, or erases when shift is held or EMPTY is selected.
        With ``click=False`` (release outside the board) nothing is painted but
        the gesture still ends. Any erase during the gesture collapses the field.
        """
        self._last_pos = pos
        changed = False
        if button == BUTTON_LEFT:
            if click:
                if shift or self.view.selected is PanelKind.EMPTY:
                    changed = self._clear(pos)
                else:
                    changed = self._paint(pos)
            if self._erased:
                view = self.view.copy()
                view.collapse()
                changed = self._stage(view) or changed
        self._erased = False
        self._flush()
        return changed

    def wheel(self, delta: float, pos: Point) -> bool:
        """Zoom around ``pos``; positive ``delta`` zooms in."""
        if not delta:
            return False
        view = self.view.copy()
        if not view.zoom(self.zoom_step ** delta, pos):
            return False
        changed = self._stage(view)
        self._flush()
        return changed

    def resize(self, size: Tuple[int, int]) -> bool:
        """Refit the field after the viewport changed size."""
        view = self.view.copy()
        view.center((float(size[0]), float(size[1])))
        changed = self._stage(view)
        self._flush()
        return changed

    def select(self, kind: PanelKind) -> bool:
        view = self.view.copy()
        view.selected = kind
        changed = self._stage(view)
        if changed:
            logger.debug("Selected panel kind %s", kind.name)
        self._flush()
        return changed

    def collapse(self) -> bool:
        view = self.view.copy()
        view.collapse()
        changed = self._stage(view)
        self._flush()
        return changed

    # --- render tick -------------------------------------------------------

    @property
    def transform(self) -> ViewTransform:
        return self.view.transform

    def cells(self) -> Iterator[Tuple[int, int, PanelKind]]:
        return self.view.cells()

    # --- helpers -----------------------------------------------------------

    def _paint(self, pos: Point) -> bool:
        kind = self.view.selected
        x, y = self.view.screen_to_grid(pos)
        field = self.view.field
        if field.in_bounds(x, y) and field.get(x, y).kind is kind:
            return False
        view = self.view.copy()
        view.flex_mut(pos).kind = kind
        return self._stage(view)

    def _clear(self, pos: Point) -> bool:
        # never grows the field; collapse runs once the gesture ends
        x, y = self.view.screen_to_grid(pos)
        field = self.view.field
        if not field.in_bounds(x, y) or field.get(x, y).is_empty:
            return False
        view = self.view.copy()
        view.panel_at(pos).kind = PanelKind.EMPTY
        self._erased = True
        return self._stage(view)

    def _stage(self, view: EditorView) -> bool:
        if view == self.view:
            return False
        self.view = view
        self._pending = True
        return True

    def _flush(self) -> None:
        if not self._pending:
            return
        self._pending = False
        if self.on_update is not None:
            self.on_update(self.view)


__all__ = [
    "EditorController",
    "PointerButtons",
    "BUTTON_LEFT",
    "BUTTON_MIDDLE",
    "BUTTON_RIGHT",
]
