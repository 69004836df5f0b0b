"""Panel styling, tile drawing and a headless editor smoke run."""
from __future__ import annotations

import os
import sys
from pathlib import Path

# Allow pygame to initialize without a real display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

import pygame  # noqa: E402
import pytest  # noqa: E402
import pygame_gui  # noqa: E402

from apps.help_content import EDITOR_CONTROLS, help_lines  # noqa: E402
from apps.shared_ui import (  # noqa: E402
    PANEL_COLORS,
    TileCache,
    cell_rect,
    panel_initials,
    status_text,
)
from board import EditorView, PanelKind, ViewTransform  # noqa: E402
from core import EditorConfig, load_view  # noqa: E402


def test_every_kind_has_a_color() -> None:
    assert len(PANEL_COLORS) == len(PanelKind)
    for kind in PanelKind:
        color = PANEL_COLORS[kind]
        assert len(color) == 3 and all(0 <= c <= 255 for c in color)
    # doubled kinds are darker than their single counterpart
    assert sum(PANEL_COLORS[PanelKind.DRAW_2X]) < sum(PANEL_COLORS[PanelKind.DRAW])


def test_panel_initials() -> None:
    assert panel_initials(PanelKind.ENCOUNTER) == "ENC"
    assert panel_initials(PanelKind.WARP_MOVE) == "WM"
    assert panel_initials(PanelKind.WARP_MOVE_2X) == "WM2"
    assert panel_initials(PanelKind.HEAL_2X) == "HEA2"


def test_tile_cache_scales_and_reuses() -> None:
    cache = TileCache(base_size=32)
    tile = cache.get(PanelKind.HOME, 20)
    assert tile.get_size() == (20, 20)
    assert cache.get(PanelKind.HOME, 20) is tile
    assert cache.get(PanelKind.HOME, 0).get_size() == (1, 1)


def test_cell_rect_follows_transform() -> None:
    transform = ViewTransform.scaling(40.0).append_translation((10.0, 5.0))
    rect = cell_rect(transform, 2, 1)
    assert (rect.x, rect.y, rect.w, rect.h) == (90, 45, 40, 40)


def test_status_and_help_text() -> None:
    text = status_text((6, 6), (128.0, 128.0), PanelKind.WARP_MOVE_2X)
    assert "6x6" in text and "128px" in text and "Warp Move x2" in text
    assert help_lines(False) == ["H: show controls"]
    assert len(help_lines(True)) == len(EDITOR_CONTROLS)


def test_editor_app_headless_paint_and_save(tmp_path: Path) -> None:
    from apps.editor import EditorApp

    storage = tmp_path / "cached_field.json"
    app = EditorApp(EditorView.new_example(), EditorConfig(storage_path=str(storage)))
    try:
        # the board is fitted into the viewport on start
        width, height = app.viewport_rect.size
        scale = min(width - 64.0, height - 64.0) / 6.0
        assert app.view.get_scale()[0] == pytest.approx(scale)

        button = next(b for b, k in app.palette_buttons.items() if k is PanelKind.ICE)
        app._handle_ui_event(pygame.event.Event(pygame_gui.UI_BUTTON_PRESSED, ui_element=button))
        assert app.view.selected is PanelKind.ICE

        lx, ly = app.view.grid_to_screen((2.5, 2.5))
        pos = (int(lx) + app.viewport_rect.x, int(ly) + app.viewport_rect.y)
        app._handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=1))
        assert app.view.field.get(2, 2).kind is PanelKind.ICE

        app._draw()
        assert load_view(storage).field.get(2, 2).kind is PanelKind.ICE
    finally:
        pygame.quit()


def test_editor_app_uses_configured_background(tmp_path: Path) -> None:
    from apps.editor import EditorApp

    config = EditorConfig(storage_path=str(tmp_path / "cached_field.json"), background=(10, 200, 30))
    app = EditorApp(EditorView.new_example(), config)
    try:
        app._draw()
        corner = (app.viewport_rect.right - 1, app.viewport_rect.bottom - 1)
        assert tuple(app.window_surface.get_at(corner))[:3] == (10, 200, 30)
    finally:
        pygame.quit()


def test_editor_app_saves_stroke_released_outside_viewport(tmp_path: Path) -> None:
    from apps.editor import EditorApp

    storage = tmp_path / "cached_field.json"
    app = EditorApp(EditorView.new_example(), EditorConfig(storage_path=str(storage)))
    try:
        lx, ly = app.view.grid_to_screen((3.5, 3.5))
        pos = (int(lx) + app.viewport_rect.x, int(ly) + app.viewport_rect.y)
        app._handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0)))
        assert load_view(storage).field.get(3, 3).is_empty

        # released over the palette: the stroke is saved, nothing is painted there
        app._handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(5, 5), button=1))
        saved = load_view(storage)
        assert saved.field.get(3, 3).kind is PanelKind.NEUTRAL
        assert saved.field.size == (6, 6)
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-q"]))
