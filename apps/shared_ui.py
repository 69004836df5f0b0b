"""Shared UI helpers: palette, per-kind panel styling and tile drawing."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

import pygame

from board import PanelKind, PanelMap

# --- Palette & drawing helpers ---------------------------------------------


def _clamp_channel(x: float) -> int:
    return max(0, min(255, int(x)))


def blend_color(color: tuple[int, int, int], target: tuple[int, int, int], t: float) -> tuple[int, int, int]:
    t = max(0.0, min(1.0, t))
    return tuple(_clamp_channel(c + (target[i] - c) * t) for i, c in enumerate(color))


def darken_color(color: tuple[int, int, int], amount: float = 0.15) -> tuple[int, int, int]:
    return blend_color(color, (0, 0, 0), amount)


EDITOR_THEME: dict[str, tuple[int, int, int]] = {
    "field_fill": (26, 30, 38),
    "field_outline": (92, 108, 132),
    "grid_line": (36, 40, 48),
    "hover": (120, 200, 255),
    "text_primary": (230, 234, 240),
    "help_text": (180, 185, 195),
}

_BASE_COLORS: Dict[PanelKind, tuple[int, int, int]] = {
    PanelKind.EMPTY: (0, 0, 0),
    PanelKind.NEUTRAL: (170, 170, 178),
    PanelKind.HOME: (236, 196, 72),
    PanelKind.ENCOUNTER: (214, 72, 72),
    PanelKind.DRAW: (88, 200, 110),
    PanelKind.BONUS: (250, 214, 96),
    PanelKind.DROP: (72, 124, 220),
    PanelKind.WARP: (170, 96, 220),
    PanelKind.DECK: (130, 92, 60),
    PanelKind.MOVE: (80, 200, 200),
    PanelKind.WARP_MOVE: (200, 120, 200),
    PanelKind.ICE: (170, 220, 250),
    PanelKind.HEAL: (120, 230, 150),
    PanelKind.DAMAGE: (150, 40, 60),
}


def _panel_color(kind: PanelKind) -> tuple[int, int, int]:
    base = _BASE_COLORS.get(kind)
    if base is not None:
        return base
    # x2 variants share the hue of their base kind, drawn darker
    single = PanelKind[kind.name[: -len("_2X")]]
    return darken_color(_BASE_COLORS[single], 0.25)


PANEL_COLORS: PanelMap[tuple[int, int, int]] = PanelMap(_panel_color)


def panel_initials(kind: PanelKind) -> str:
    doubled = kind.name.endswith("_2X")
    parts = (kind.name[: -len("_2X")] if doubled else kind.name).split("_")
    short = parts[0][:3] if len(parts) == 1 else "".join(p[0] for p in parts)
    return short + ("2" if doubled else "")


def make_panel_tile(kind: PanelKind, size: int, font: Optional[pygame.font.Font] = None) -> pygame.Surface:
    """Render the base texture for a panel kind."""
    tile = pygame.Surface((size, size), pygame.SRCALPHA)
    if kind is PanelKind.EMPTY:
        return tile
    color = PANEL_COLORS[kind]
    rect = tile.get_rect().inflate(-max(2, size // 16), -max(2, size // 16))
    radius = max(2, size // 8)
    pygame.draw.rect(tile, color, rect, border_radius=radius)
    pygame.draw.rect(tile, darken_color(color, 0.35), rect, max(1, size // 32), border_radius=radius)
    if font is not None:
        text = font.render(panel_initials(kind), True, darken_color(color, 0.7))
        tile.blit(text, text.get_rect(center=rect.center))
    return tile


class TileCache:
    """Per-kind base tiles, rescaled on demand and cached per pixel size."""

    def __init__(self, base_size: int = 128, font: Optional[pygame.font.Font] = None) -> None:
        self.base_size = base_size
        self.tiles: PanelMap[pygame.Surface] = PanelMap(lambda k: make_panel_tile(k, base_size, font))
        self._scaled: PanelMap[Dict[int, pygame.Surface]] = PanelMap(lambda _k: {})

    def get(self, kind: PanelKind, size: int) -> pygame.Surface:
        size = max(1, size)
        cache = self._scaled[kind]
        surf = cache.get(size)
        if surf is None:
            if len(cache) > 8:
                cache.clear()
            surf = pygame.transform.smoothscale(self.tiles[kind], (size, size))
            cache[size] = surf
        return surf


def cell_rect(transform, x: int, y: int) -> pygame.Rect:
    """Screen rect covered by grid cell ``(x, y)`` under a view transform."""
    x0, y0 = transform.apply((x, y))
    x1, y1 = transform.apply((x + 1, y + 1))
    left, top = round(min(x0, x1)), round(min(y0, y1))
    return pygame.Rect(left, top, max(1, round(max(x0, x1)) - left), max(1, round(max(y0, y1)) - top))


def status_text(field_size: Tuple[int, int], scale: Tuple[float, float], selected: PanelKind) -> str:
    return f"field {field_size[0]}x{field_size[1]}  zoom {scale[0]:.0f}px  panel {selected.label}"
