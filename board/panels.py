"""Panel kinds, the panel cell value, and an ordinal-indexed per-kind map."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterator, List, Tuple, TypeVar

T = TypeVar("T")


class PanelKind(Enum):
    """Closed set of panel categories.

    Values are the stable wire ordinals (declaration order). ``PanelMap`` and the
    storage format both index by them, so new kinds may only be appended.
    """

    EMPTY = 0
    NEUTRAL = 1
    HOME = 2
    ENCOUNTER = 3
    DRAW = 4
    BONUS = 5
    DROP = 6
    WARP = 7
    DRAW_2X = 8
    BONUS_2X = 9
    DROP_2X = 10
    DECK = 11
    ENCOUNTER_2X = 12
    MOVE = 13
    MOVE_2X = 14
    WARP_MOVE = 15
    WARP_MOVE_2X = 16
    ICE = 17
    HEAL = 18
    HEAL_2X = 19
    DAMAGE = 20
    DAMAGE_2X = 21

    @property
    def ordinal(self) -> int:
        return self.value

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "PanelKind":
        try:
            return cls(ordinal)
        except ValueError:
            raise ValueError(f"invalid panel kind ordinal {ordinal}") from None

    @property
    def is_empty(self) -> bool:
        return self is PanelKind.EMPTY

    @property
    def label(self) -> str:
        name = self.name
        doubled = name.endswith("_2X")
        if doubled:
            name = name[: -len("_2X")]
        text = name.replace("_", " ").title()
        return f"{text} x2" if doubled else text


PANEL_KIND_COUNT = len(PanelKind)


@dataclass(frozen=True)
class Panel:
    """A single board cell. Panels are plain values and are copied freely."""

    kind: PanelKind = PanelKind.EMPTY

    @property
    def is_empty(self) -> bool:
        return self.kind is PanelKind.EMPTY


EMPTY_PANEL = Panel(PanelKind.EMPTY)


class PanelMap(Generic[T]):
    """Fixed-size map keyed by ``PanelKind``.

    Storage is a plain list indexed by the kind's ordinal and is always total:
    every kind has a slot, filled by the initializer passed to the constructor.
    """

    __slots__ = ("_data",)

    def __init__(self, init: Callable[[PanelKind], T]) -> None:
        self._data: List[T] = [init(kind) for kind in PanelKind]

    def __getitem__(self, kind: PanelKind) -> T:
        return self._data[kind.ordinal]

    def __setitem__(self, kind: PanelKind, value: T) -> None:
        self._data[kind.ordinal] = value

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[PanelKind]:
        return iter(PanelKind)

    def items(self) -> Iterator[Tuple[PanelKind, T]]:
        for kind in PanelKind:
            yield kind, self._data[kind.ordinal]

    def values(self) -> Iterator[T]:
        return iter(self._data)


__all__ = ["PanelKind", "PANEL_KIND_COUNT", "Panel", "EMPTY_PANEL", "PanelMap"]
