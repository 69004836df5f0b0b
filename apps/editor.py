"""Board editor app: paint panels onto a flexible grid with pygame + pygame_gui."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame
import pygame_gui

from board import EditorView, PanelKind
from core import EditorConfig, save_view
from apps.controller import EditorController, PointerButtons
from apps.help_content import help_lines
from apps.shared_ui import EDITOR_THEME, TileCache, cell_rect, status_text

logger = logging.getLogger(__name__)

PALETTE_WIDTH = 150
PALETTE_BUTTON = (126, 28)


class EditorApp:
    def __init__(self, view: EditorView, config: Optional[EditorConfig] = None) -> None:
        self.config = config or EditorConfig()
        pygame.init()
        pygame.display.set_caption("Board Editor")
        self.window_size: Tuple[int, int] = tuple(self.config.window_size)
        self.window_surface = pygame.display.set_mode(self.window_size, pygame.RESIZABLE)
        self.manager = pygame_gui.UIManager(self.window_size)
        self.theme = EDITOR_THEME
        self.clock = pygame.time.Clock()
        self.running = True
        self.show_help = False
        self.storage_path: Path = self.config.storage

        self.font = pygame.font.Font(pygame.font.get_default_font(), 14)
        self.tiles = TileCache(font=pygame.font.Font(pygame.font.get_default_font(), 40))
        self.viewport_rect = self._viewport_for(self.window_size)
        self.controller = EditorController(view, zoom_step=self.config.zoom_step, on_update=self._on_update)
        self.palette_buttons: Dict[pygame_gui.elements.UIButton, PanelKind] = {}

        self._build_ui()
        self.controller.resize(self.viewport_rect.size)

    @staticmethod
    def _viewport_for(window_size: Tuple[int, int]) -> pygame.Rect:
        return pygame.Rect(PALETTE_WIDTH, 0, max(1, window_size[0] - PALETTE_WIDTH), window_size[1])

    def _build_ui(self) -> None:
        self.palette_panel = pygame_gui.elements.UIPanel(
            relative_rect=pygame.Rect((0, 0), (PALETTE_WIDTH, self.window_size[1])), manager=self.manager
        )
        y = 8
        for kind in PanelKind:
            if kind is PanelKind.EMPTY:
                continue
            button = pygame_gui.elements.UIButton(
                relative_rect=pygame.Rect((8, y), PALETTE_BUTTON),
                text=kind.label,
                manager=self.manager,
                container=self.palette_panel,
            )
            self.palette_buttons[button] = kind
            y += PALETTE_BUTTON[1] + 4
        self._sync_palette()

    def _sync_palette(self) -> None:
        selected = self.controller.view.selected
        for button, kind in self.palette_buttons.items():
            if kind is selected:
                button.select()
            else:
                button.unselect()

    @property
    def view(self) -> EditorView:
        return self.controller.view

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                consumed = self.manager.process_events(event)
                self._handle_ui_event(event)
                if not consumed:
                    self._handle_event(event)
            self.manager.update(dt)
            self._draw()
        self._save()
        pygame.quit()

    def _local(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        return (float(pos[0] - self.viewport_rect.x), float(pos[1] - self.viewport_rect.y))

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            ctrl = bool(event.mod & (pygame.KMOD_CTRL | pygame.KMOD_META))
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_s and ctrl:
                self._save()
            elif event.key == pygame.K_c:
                self.controller.collapse()
            elif event.key == pygame.K_f:
                self.controller.resize(self.viewport_rect.size)
            elif event.key == pygame.K_h:
                self.show_help = not self.show_help
        elif event.type == pygame.MOUSEMOTION:
            if not self.viewport_rect.collidepoint(event.pos) and not any(event.buttons):
                return
            left, middle, right = event.buttons[:3]
            buttons = PointerButtons.from_pressed(left=bool(left), right=bool(right), middle=bool(middle))
            self.controller.pointer_move(self._local(event.pos), buttons)
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button in (1, 2, 3):
                shift = bool(pygame.key.get_mods() & pygame.KMOD_SHIFT)
                inside = self.viewport_rect.collidepoint(event.pos)
                self.controller.pointer_up(self._local(event.pos), event.button, shift=shift, click=bool(inside))
        elif event.type == pygame.MOUSEWHEEL:
            mouse = pygame.mouse.get_pos()
            if self.viewport_rect.collidepoint(mouse):
                self.controller.wheel(event.y, self._local(mouse))
        elif event.type == pygame.VIDEORESIZE:
            self._resize(event.size)

    def _handle_ui_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame_gui.UI_BUTTON_PRESSED:
            return
        kind = self.palette_buttons.get(event.ui_element)
        if kind is not None:
            self.controller.select(kind)
            self._sync_palette()

    def _resize(self, size: Tuple[int, int]) -> None:
        self.window_size = (max(PALETTE_WIDTH + 1, size[0]), max(1, size[1]))
        self.window_surface = pygame.display.set_mode(self.window_size, pygame.RESIZABLE)
        self.manager.set_window_resolution(self.window_size)
        self.palette_panel.set_dimensions((PALETTE_WIDTH, self.window_size[1]))
        self.viewport_rect = self._viewport_for(self.window_size)
        self.controller.resize(self.viewport_rect.size)

    def _on_update(self, view: EditorView) -> None:
        if self.config.autosave:
            self._save(view)

    def _save(self, view: Optional[EditorView] = None) -> None:
        try:
            save_view(self.storage_path, view or self.view)
        except OSError as exc:
            logger.warning("Could not save board to %s: %s", self.storage_path, exc)

    # --- drawing -------------------------------------------------------------

    def _draw(self) -> None:
        self.window_surface.fill(self.config.background)
        canvas = self.window_surface.subsurface(self.viewport_rect)
        canvas.fill(self.config.background)
        self._draw_field(canvas)
        self._draw_status(canvas)
        self.manager.draw_ui(self.window_surface)
        pygame.display.update()

    def _draw_field(self, canvas: pygame.Surface) -> None:
        view = self.view
        transform = view.transform
        width, height = view.field.size
        if width and height:
            x0, y0 = transform.apply((0, 0))
            x1, y1 = transform.apply((width, height))
            outline = pygame.Rect(round(x0), round(y0), round(x1 - x0), round(y1 - y0))
            pygame.draw.rect(canvas, self.theme["field_fill"], outline)
            if self.config.show_grid:
                for gx in range(1, width):
                    sx, _ = transform.apply((gx, 0))
                    pygame.draw.line(canvas, self.theme["grid_line"], (round(sx), outline.top), (round(sx), outline.bottom - 1))
                for gy in range(1, height):
                    _, sy = transform.apply((0, gy))
                    pygame.draw.line(canvas, self.theme["grid_line"], (outline.left, round(sy)), (outline.right - 1, round(sy)))
            pygame.draw.rect(canvas, self.theme["field_outline"], outline, 1)
        clip = canvas.get_rect()
        for x, y, kind in self.controller.cells():
            rect = cell_rect(transform, x, y)
            if not rect.colliderect(clip):
                continue
            canvas.blit(self.tiles.get(kind, rect.width), rect.topleft)
        self._draw_hover(canvas)

    def _draw_hover(self, canvas: pygame.Surface) -> None:
        mouse = pygame.mouse.get_pos()
        if not self.viewport_rect.collidepoint(mouse):
            return
        gx, gy = self.view.screen_to_grid(self._local(mouse))
        pygame.draw.rect(canvas, self.theme["hover"], cell_rect(self.view.transform, gx, gy), 2)

    def _draw_status(self, canvas: pygame.Surface) -> None:
        view = self.view
        text = status_text(view.field.size, view.get_scale(), view.selected)
        canvas.blit(self.font.render(text, True, self.theme["text_primary"]), (8, 8))
        y = 28
        for line in help_lines(self.show_help):
            canvas.blit(self.font.render(line, True, self.theme["help_text"]), (8, y))
            y += 18


def main(view: EditorView, config: Optional[EditorConfig] = None) -> None:
    app = EditorApp(view, config)
    app.run()
