"""Editor view: a panel field paired with the camera transform that draws it.

The field and the transform are versioned together. Every resize of the field
(growth in :meth:`EditorView.flex_mut`, shrinking in :meth:`EditorView.collapse`)
prepends a compensating translation so no surviving panel moves on screen.
"""
from __future__ import annotations

import logging
import math
from typing import Iterator, Optional, Tuple

from .errors import InvariantError
from .field import Field, Offset, Size
from .panels import EMPTY_PANEL, Panel, PanelKind
from .transform import Vec2, ViewTransform

logger = logging.getLogger(__name__)

GridPos = Tuple[int, int]


class PanelSlot:
    """Writable handle on one in-bounds position of a field."""

    __slots__ = ("_field", "x", "y")

    def __init__(self, field: Field, x: int, y: int) -> None:
        self._field = field
        self.x = x
        self.y = y

    @property
    def panel(self) -> Panel:
        return self._field.get(self.x, self.y)

    @panel.setter
    def panel(self, panel: Panel) -> None:
        self._field.set(self.x, self.y, panel)

    @property
    def kind(self) -> PanelKind:
        return self.panel.kind

    @kind.setter
    def kind(self, kind: PanelKind) -> None:
        self.panel = EMPTY_PANEL if kind is PanelKind.EMPTY else Panel(kind)

    def __repr__(self) -> str:
        return f"PanelSlot(x={self.x}, y={self.y}, kind={self.kind.name})"


class EditorView:
    """Transform, field and selected panel kind, changed as one unit.

    Copies share the field until one of them writes to it (see
    :meth:`field_mut`). Two views compare equal when they share the same field
    object, select the same kind and carry equal transforms.
    """

    DEFAULT_PANEL = PanelKind.NEUTRAL

    INITIAL_ZOOM = 128.0
    MAX_ZOOM = INITIAL_ZOOM * 2.0
    MIN_ZOOM = INITIAL_ZOOM / 4.0
    CENTER_MARGIN = 64.0

    def __init__(
        self,
        *,
        transform: Optional[ViewTransform] = None,
        field: Optional[Field] = None,
        selected: PanelKind = DEFAULT_PANEL,
    ) -> None:
        self.transform = transform if transform is not None else ViewTransform.identity()
        self._field = field if field is not None else Field()
        self._owns_field = True
        self.selected = selected

    @classmethod
    def new_example(cls) -> "EditorView":
        """A 6x6 ring of panels, drawn at the initial zoom."""
        e = EMPTY_PANEL
        home = Panel(PanelKind.HOME)
        bonus = Panel(PanelKind.BONUS)
        draw = Panel(PanelKind.DRAW)
        encounter = Panel(PanelKind.ENCOUNTER)
        drop = Panel(PanelKind.DROP)
        field = Field.from_rows(
            [
                [home,      bonus, draw,      encounter, drop,  home],
                [drop,      e,     e,         e,         e,     bonus],
                [encounter, e,     e,         e,         e,     draw],
                [draw,      e,     e,         e,         e,     encounter],
                [bonus,     e,     e,         e,         e,     drop],
                [home,      drop,  encounter, draw,      bonus, home],
            ]
        )  # fmt: skip
        return cls(transform=ViewTransform.scaling(cls.INITIAL_ZOOM), field=field)

    # --- field sharing -----------------------------------------------------

    @property
    def field(self) -> Field:
        return self._field

    def copy(self) -> "EditorView":
        """Cheap copy that shares the field until either side writes to it."""
        twin = EditorView(transform=self.transform, field=self._field, selected=self.selected)
        twin._owns_field = False
        self._owns_field = False
        return twin

    def field_mut(self) -> Field:
        if not self._owns_field:
            self._field = self._field.copy()
            self._owns_field = True
        return self._field

    def _replace_field(self, field: Field) -> None:
        self._field = field
        self._owns_field = True

    # --- camera --------------------------------------------------------------

    def pan(self, delta: Vec2) -> None:
        """Translate the view by ``delta`` screen pixels."""
        self.transform = self.transform.append_translation(delta)

    def scale(self, factor: float, at: Vec2) -> None:
        """Scale the view by ``factor`` around the screen point ``at``.

        No clamping happens here; see :meth:`zoom` for the bounded variant.
        """
        if not (factor > 0.0 and math.isfinite(factor)):
            raise InvariantError(f"scale factor must be positive and finite, got {factor}")
        ax, ay = at
        self.transform = (
            self.transform.append_translation((-ax, -ay))
            .append_scaling(factor)
            .append_translation((ax, ay))
        )

    def get_scale(self) -> Vec2:
        return self.transform.scale()

    def zoom(self, factor: float, at: Vec2) -> bool:
        """Scale around ``at`` while keeping the zoom within ``[MIN_ZOOM, MAX_ZOOM]``.

        A step that starts at or past the bound in its direction of travel is
        refused; a step that would cross the bound stops exactly on it. Returns
        whether the transform changed.
        """
        sx, sy = self.get_scale()
        if factor > 1.0:
            current = max(sx, sy)
            if current >= self.MAX_ZOOM or math.isclose(current, self.MAX_ZOOM):
                return False
            factor = min(factor, self.MAX_ZOOM / current)
        elif factor < 1.0:
            current = min(sx, sy)
            if current <= self.MIN_ZOOM or math.isclose(current, self.MIN_ZOOM):
                return False
            factor = max(factor, self.MIN_ZOOM / current)
        else:
            return False
        self.scale(factor, at)
        return True

    def center(self, bounding_box: Vec2) -> None:
        """Fit the whole field inside ``bounding_box`` pixels, centered.

        The result keeps a fixed margin and is clamped to the zoom limits. A
        field with no width or height leaves the transform untouched.
        """
        width, height = self._field.size
        if width <= 0 or height <= 0:
            return
        bw, bh = bounding_box
        room_x = bw - self.CENTER_MARGIN
        room_y = bh - self.CENTER_MARGIN
        scale = min(room_x / width, room_y / height)
        scale = max(self.MIN_ZOOM, min(self.MAX_ZOOM, scale))
        tx = (bw - width * scale) / 2.0
        ty = (bh - height * scale) / 2.0
        self.transform = ViewTransform.scaling(scale).append_translation((tx, ty))

    def screen_to_grid(self, pos: Vec2) -> GridPos:
        """Grid cell under a screen position. May lie outside the field."""
        gx, gy = self.transform.unapply(pos)
        return (math.floor(gx), math.floor(gy))

    def grid_to_screen(self, cell: Tuple[float, float]) -> Vec2:
        return self.transform.apply(cell)

    # --- flexible editing --------------------------------------------------

    def panel_at(self, pos: Vec2) -> Optional[PanelSlot]:
        """Slot under a screen position, or ``None`` when outside the field."""
        x, y = self.screen_to_grid(pos)
        if not self._field.in_bounds(x, y):
            return None
        return PanelSlot(self.field_mut(), x, y)

    def flex_mut(self, pos: Vec2) -> PanelSlot:
        """Slot under a screen position, growing the field to include it."""
        x, y = self._flex(pos)
        return PanelSlot(self.field_mut(), x, y)

    def collapse(self) -> None:
        """Shrink the field to the smallest box holding every non-empty panel."""
        left, top, right, bottom = self._field.bounds()
        self.resize_field((right - left, bottom - top), (-left, -top))

    def _flex(self, pos: Vec2) -> GridPos:
        x, y = self.screen_to_grid(pos)
        if self._field.in_bounds(x, y):
            return (x, y)
        width, height = self._field.size
        offset = (max(-x, 0), max(-y, 0))
        grow = (max(x + 1 - width, 0), max(y + 1 - height, 0))
        new_size = (width + offset[0] + grow[0], height + offset[1] + grow[1])
        self.resize_field(new_size, offset)
        return (x + offset[0], y + offset[1])

    def resize_field(self, size: Size, offset: Offset) -> None:
        """Resize the field and prepend the matching translation to the view.

        New panel ``(x, y)`` holds old panel ``(x - dx, y - dy)`` and is drawn at
        the same pixel that old panel was.
        """
        old_size = self._field.size
        self._replace_field(self._field.resized(size, offset))
        dx, dy = offset
        self.transform = self.transform.prepend_translation((-float(dx), -float(dy)))
        logger.debug("Resized field %s -> %s (offset %s)", old_size, size, offset)

    # --- rendering -----------------------------------------------------------

    def cells(self) -> Iterator[Tuple[int, int, PanelKind]]:
        """Non-empty ``(x, y, kind)`` triples in row-major order."""
        for x, y, panel in self._field.filled():
            yield x, y, panel.kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditorView):
            return NotImplemented
        return (
            self._field is other._field
            and self.selected is other.selected
            and self.transform == other.transform
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        w, h = self._field.size
        return f"EditorView(field={w}x{h}, selected={self.selected.name}, transform={self.transform!r})"


__all__ = ["EditorView", "PanelSlot", "GridPos"]
