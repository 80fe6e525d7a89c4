# src/algoglass/app/viewer.py
#!/usr/bin/env python3
"""
AlgoGlass Viewer: grid, frontier panel, narrator line and playback controls

- Mouse:
    left click / drag   -> toggle walls
    shift + click       -> move start
    ctrl + click        -> move target
- Keyboard:
    [1]/[2]/[3]/[4]  -> algorithm (BFS / DFS / Dijkstra / A*)
    [SPACE]          -> run / pause
    [N]/[B]          -> step forward / back
    [R]              -> reset
    [C]              -> clear board
    [F]              -> fill walls
    [S]              -> cycle speed
    [Q]/[ESC]        -> quit

Config: see algoglass.core.config (ALGOGLASS_* env vars, --rows= / --algo= ...)
"""

import logging
import sys
from typing import List, Optional, Tuple

import pygame

from algoglass.app.playback import PlaybackDriver
from algoglass.core.config import SPEEDS, resolve_config
from algoglass.core.controller import SimulationController
from algoglass.core.registry import ALGORITHMS, LABELS
from algoglass.core.types import (
    Cell, Coord, Grid,
    EMPTY, WALL, START, TARGET, VISITED, FRONTIER, CURRENT, PATH,
)

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 420            # right band: internals + narrator + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 22
FONT_NAME = None  # default pygame font
FRONTIER_ROWS = 12

# Colors
WHITE       = (255,255,255)
TEXT_LIGHT  = (230,235,240)
TEXT_DIM    = (150,158,170)
ACCENT_GOLD = (255,210,0)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
GRID_LINE   = (60,66,78)

# Buttons: idle / hover / toggled on
BTN_IDLE    = (36,40,48,220)
BTN_HOVER   = (46,50,60,230)
BTN_ACTIVE  = (58,86,160,235)
BTN_BORDER  = (120,170,255)

KIND_COLORS = {
    EMPTY:    (236,239,244),
    WALL:     ( 45, 52, 64),
    START:    ( 46,204,113),
    TARGET:   (231, 76, 60),
    VISITED:  (129,161,193),
    FRONTIER: (163,230,210),
    CURRENT:  (241,196, 15),
    PATH:     (255,210,  0),
}

SPEED_ORDER = list(SPEEDS)
ALGO_KEYS = {
    pygame.K_1: "bfs",
    pygame.K_2: "dfs",
    pygame.K_3: "dijkstra",
    pygame.K_4: "astar",
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = BTN_ACTIVE
        elif self.hover:
            bg = BTN_HOVER
        else:
            bg = BTN_IDLE
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=8)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, BTN_BORDER, self.rect, width=2, border_radius=8)

        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, controller: SimulationController):
        pygame.init()

        self.ctl = controller
        self.playback = PlaybackDriver(controller)
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        grid = controller.state.grid
        self.cell_size = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * self.cell_size, 720)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("AlgoGlass: Pathfinding Replay")

        self._buttons: List[UIButton] = []
        self._drag_walls: Optional[bool] = None   # wall state being painted while dragging
        self._dragged: set = set()
        self.clock = pygame.time.Clock()
        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits the window next to the panel."""
        grid = self.ctl.state.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // grid.cols, avail_h // grid.rows)))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)
        self._build_buttons()

    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        w = rb.width - 32
        h = 32
        gap = 8
        y = rb.bottom - 4 * (h + gap) - 8

        half = (w - gap) // 2
        quarter = (w - 3 * gap) // 4

        def add(label, cb, rect, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, pygame.Rect(x, y, half, h),
            togglable=True, store_as="btn_run")
        add("Reset", self.ctl.reset, pygame.Rect(x + half + gap, y, half, h))
        y += h + gap
        add("< Back", self.ctl.prev_step, pygame.Rect(x, y, half, h))
        add("Step >", self.ctl.next_step, pygame.Rect(x + half + gap, y, half, h))
        y += h + gap
        add("Clear Board", self.ctl.clear_board, pygame.Rect(x, y, half, h))
        add("Fill Walls", self.ctl.fill_walls, pygame.Rect(x + half + gap, y, half, h))
        y += h + gap

        self._algo_buttons = {}
        for i, kind in enumerate(ALGORITHMS):
            rect = pygame.Rect(x + i * (quarter + gap), y, quarter, h)
            btn = UIButton(ALGORITHMS[kind]().name, rect,
                           lambda k=kind: self.ctl.set_algorithm(k), togglable=True)
            self._buttons.append(btn)
            self._algo_buttons[kind] = btn
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.ctl.state.is_playing)
        for kind, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(kind == self.ctl.state.algorithm)

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.playback.tick()
            self._refresh_active_states()
            self._draw()
            self.clock.tick(60)

    def _toggle_run(self):
        s = self.ctl.state
        if s.is_playing:
            self.ctl.set_playing(False)
        else:
            self.ctl.play()

    def _cycle_speed(self):
        i = SPEED_ORDER.index(self.ctl.state.speed)
        self.ctl.set_speed(SPEED_ORDER[(i + 1) % len(SPEED_ORDER)])

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        cs = self.cell_size
        col = (pos[0] - ox) // cs
        row = (pos[1] - oy) // cs
        if self.ctl.state.grid.in_bounds((row, col)) and pos[0] >= ox and pos[1] >= oy:
            return (row, col)
        return None

    def _handle_grid_click(self, pos, mods: int):
        rc = self._cell_at(pos)
        if rc is None:
            return
        if mods & pygame.KMOD_SHIFT:
            self.ctl.set_start_node(*rc)
        elif mods & pygame.KMOD_CTRL:
            self.ctl.set_target_node(*rc)
        else:
            if self.ctl.toggle_wall(*rc):
                self._drag_walls = self.ctl.state.grid.cell(rc).is_wall
                self._dragged = {rc}

    def _handle_drag(self, pos):
        rc = self._cell_at(pos)
        if rc is None or self._drag_walls is None or rc in self._dragged:
            return
        self._dragged.add(rc)
        if self.ctl.state.grid.cell(rc).is_wall != self._drag_walls:
            self.ctl.toggle_wall(*rc)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_n:
                    self.ctl.next_step()
                elif e.key == pygame.K_b:
                    self.ctl.prev_step()
                elif e.key == pygame.K_r:
                    self.ctl.reset()
                elif e.key == pygame.K_c:
                    self.ctl.clear_board()
                elif e.key == pygame.K_f:
                    self.ctl.fill_walls()
                elif e.key == pygame.K_s:
                    self._cycle_speed()
                elif e.key in ALGO_KEYS:
                    self.ctl.set_algorithm(ALGO_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if not any(b.handle_mouse(e) for b in self._buttons):
                    self._handle_grid_click(e.pos, pygame.key.get_mods())
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._drag_walls = None
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if e.buttons[0]:
                    self._handle_drag(e.pos)

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid(self.ctl.display_grid)
        self._draw_panel()
        for b in self._buttons:
            b.draw(self.screen, self.font_small)
        pygame.display.flip()

    def _draw_grid(self, grid: Grid):
        cs = self.cell_size
        ox, oy = self._grid_origin
        for row in grid.cells:
            for cell in row:
                rect = pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)
                pygame.draw.rect(self.screen, KIND_COLORS.get(cell.kind, WHITE), rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _card(self, y: int, h: int) -> pygame.Rect:
        rb = self._right_band
        rect = pygame.Rect(rb.x + 10, y, rb.width - 20, h)
        card = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=12)
        hi = pygame.Surface((rect.width, 22), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=12)
        card.blit(hi, (0, 0))
        self.screen.blit(card, rect.topleft)
        return rect

    def _draw_panel(self):
        s = self.ctl.state
        snap = self.ctl.current_snapshot
        rb = self._right_band
        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT, font=None):
            nonlocal y0
            f = font or (self.font_big if big else self.font)
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 5

        # ---- internals card ----
        self._card(rb.y + 8, 330)
        line(f"Internal State: {self.ctl.structure_title}", big=True, color=ACCENT_GOLD)
        line(LABELS[s.algorithm], color=TEXT_DIM, font=self.font_small)
        entries = snap.structure_state if snap else ()
        if not entries:
            line("Empty", color=TEXT_DIM)
        else:
            shown = entries[:FRONTIER_ROWS * 3]
            for i in range(0, len(shown), 3):
                chunk = shown[i:i + 3]
                line("  ".join(self._entry_label(e) for e in chunk), font=self.font_small)
            if len(entries) > len(shown):
                line(f"... {len(entries) - len(shown)} more", color=TEXT_DIM, font=self.font_small)

        # ---- current node + metrics ----
        y0 = rb.y + 350
        self._card(y0 - 10, 130)
        if snap and snap.current_node is not None:
            line("Processing Node", color=ACCENT_GOLD)
            line(self._node_details(snap.current_node), font=self.font_small)
        m = snap.metrics if snap else {}
        line(f"Popped: {m.get('popped', 0)}   Open: {m.get('open_size', 0)}   "
             f"Closed: {m.get('closed_count', 0)}   Path: {m.get('path_len', 0)}",
             font=self.font_small)
        step_txt = f"Step {s.cursor + 1}/{len(s.snapshots)}" if s.snapshots else "No run yet"
        line(f"{step_txt}   Speed: {s.speed}", font=self.font_small)

        # ---- narrator ----
        y0 = rb.y + 490
        self._card(y0 - 10, 60)
        line(self.ctl.log_message, font=self.font_small)

    @staticmethod
    def _entry_label(e) -> str:
        if e.key is None:
            return f"({e.row}, {e.col})"
        return f"({e.row}, {e.col}):{e.key:g}"

    @staticmethod
    def _node_details(cell: Cell) -> str:
        parts = [f"Position: ({cell.row}, {cell.col})"]
        if cell.distance != float("inf"):
            parts.append(f"Distance: {cell.distance}")
        if cell.f != float("inf"):
            parts.append(f"F: {cell.f} G: {cell.g} H: {cell.h}")
        return "   ".join(parts)


# ---------- main ----------
def main():
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    try:
        controller = SimulationController(resolve_config())
    except ValueError as ex:
        logger.error("Failed to start: %s", ex)
        sys.exit(1)
    Viewer(controller).run()


if __name__ == "__main__":
    main()
