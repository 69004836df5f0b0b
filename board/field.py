"""Rectangular panel grid with a row-major buffer and the resize primitive."""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import InvariantError
from .panels import EMPTY_PANEL, Panel

Size = Tuple[int, int]
Offset = Tuple[int, int]


class Field:
    """A ``width x height`` grid of panels stored row-major.

    Single panels may be written in place. Changing the dimensions always goes
    through :meth:`resized`, which builds a new field and leaves this one intact.
    """

    __slots__ = ("_width", "_height", "_cells")

    def __init__(self, width: int = 0, height: int = 0, cells: Optional[Iterable[Panel]] = None) -> None:
        if width < 0 or height < 0:
            raise InvariantError(f"field size cannot be negative: {width}x{height}")
        if cells is None:
            buffer = [EMPTY_PANEL] * (width * height)
        else:
            buffer = list(cells)
            if len(buffer) != width * height:
                raise InvariantError(
                    f"field buffer holds {len(buffer)} panels, expected {width * height}"
                )
        self._width = width
        self._height = height
        self._cells: List[Panel] = buffer

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Panel]]) -> "Field":
        """Build a field from a literal layout given as a list of rows."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        cells: List[Panel] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {y} has {len(row)} panels, expected {width}")
            cells.extend(row)
        return cls(width, height, cells)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Size:
        return (self._width, self._height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self._width}x{self._height} field")
        return y * self._width + x

    def get(self, x: int, y: int) -> Panel:
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, panel: Panel) -> None:
        self._cells[self._index(x, y)] = panel

    def rows(self) -> Iterator[List[Panel]]:
        w = self._width
        for y in range(self._height):
            yield self._cells[y * w : (y + 1) * w]

    def columns(self) -> Iterator[List[Panel]]:
        w = self._width
        for x in range(w):
            yield self._cells[x::w] if w else []

    def __iter__(self) -> Iterator[Tuple[int, int, Panel]]:
        """Yield ``(x, y, panel)`` in row-major order."""
        w = self._width
        for i, panel in enumerate(self._cells):
            yield i % w, i // w, panel

    def filled(self) -> Iterator[Tuple[int, int, Panel]]:
        return ((x, y, p) for x, y, p in self if not p.is_empty)

    def __len__(self) -> int:
        return len(self._cells)

    def is_blank(self) -> bool:
        return all(p.is_empty for p in self._cells)

    def bounds(self) -> Tuple[int, int, int, int]:
        """Return ``(left, top, right, bottom)`` of the non-empty panels.

        Right and bottom are exclusive. A field with no content reports the
        degenerate box ``(0, 0, 0, 0)``.
        """
        nonempty_cols = [x for x, col in enumerate(self.columns()) if not all(p.is_empty for p in col)]
        nonempty_rows = [y for y, row in enumerate(self.rows()) if not all(p.is_empty for p in row)]
        if not nonempty_cols or not nonempty_rows:
            return (0, 0, 0, 0)
        return (nonempty_cols[0], nonempty_rows[0], nonempty_cols[-1] + 1, nonempty_rows[-1] + 1)

    def resized(self, size: Size, offset: Offset) -> "Field":
        """Return a new ``size`` field where ``new[x, y] == old[x - dx, y - dy]``.

        Positions that map outside this field are filled with the empty panel.
        The offset components may have either sign.
        """
        new_w, new_h = size
        if new_w < 0 or new_h < 0:
            raise InvariantError(f"resize target cannot be negative: {new_w}x{new_h}")
        dx, dy = offset
        old_w = self._width
        old = self._cells
        cells: List[Panel] = []
        for y in range(new_h):
            oy = y - dy
            if not 0 <= oy < self._height:
                cells.extend([EMPTY_PANEL] * new_w)
                continue
            base = oy * old_w
            for x in range(new_w):
                ox = x - dx
                cells.append(old[base + ox] if 0 <= ox < old_w else EMPTY_PANEL)
        return Field(new_w, new_h, cells)

    def copy(self) -> "Field":
        return Field(self._width, self._height, self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Field({self._width}x{self._height}, filled={sum(1 for _ in self.filled())})"


__all__ = ["Field", "Size", "Offset"]
