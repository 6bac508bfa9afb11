# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Grid Pathfinding Viewer — Editor + Animated A* + Metrics

- Mouse:
    [LEFT]       -> toggle wall
    [RIGHT]      -> place start, then end (alternating)
- Keyboard:
    [SPACE]      -> animate search (run/pause)
    [N]          -> single step
    [ENTER]      -> solve instantly (timed)
    [R]          -> reset overlays
    [C]          -> clear walls
    [G]          -> toggle diagonal movement
    [H]          -> cycle heuristic (manhattan / octile / dijkstra)
    [+]/[-]      -> steps/sec
    [ / ]        -> grid size (10-cell increments)
    [Q]/[ESC]    -> quit

Config: config.yaml (or $GRIDPATH_CONFIG), overridden by --section.key=value.
"""

import logging
import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridpath.app.editor import CELLS_PER_LENGTH, Editor
from gridpath.config import Config, apply_cli_overrides, configure_logging, load_config
from gridpath.core.astar import AStarSearch
from gridpath.core.types import Coord, Grid

logger = logging.getLogger(__name__)

# ---------- Layout ----------
GRID_MARGIN = 16
MIN_CELL_SIZE = 8
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
WALL_GREY   = (110,110,110)
FLOOR       = (235,235,235)
START_GREEN = ( 46,139, 87)
END_RED     = (220, 50, 47)
PATH_PURPLE = (128,  0,128)
OPEN_CYAN_A = (0,150,255,110)
CLOSED_MAG_A= (255,0,120,90)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


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
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
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
    def __init__(self, editor: Editor, config: Config):
        pygame.init()

        self.editor = editor
        self.config = config
        self.panel_w = config.viewer.panel_width
        self.cell_size = config.viewer.cell_size
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w, win_h = self._window_size_for(editor)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Pathfinding")

        self.running = False
        self.state = "Idle"
        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.grid: Grid = editor.build_grid()
        self.search: Optional[AStarSearch] = None
        self.open_set: set[Coord] = set()
        self.closed_set: set[Coord] = set()
        self.path: List[Coord] = []

        self.clock = pygame.time.Clock()
        self.steps_per_sec = config.viewer.steps_per_sec
        self.status_text = ""
        self._last_step_t = 0.0
        self._last_metrics: Dict = {}
        self._reset_overlays()

    # ---------- layout ----------
    def _window_size_for(self, editor: Editor) -> Tuple[int, int]:
        grid_px_w = GRID_MARGIN*2 + editor.cols * self.config.viewer.cell_size
        grid_px_h = GRID_MARGIN*2 + editor.rows * self.config.viewer.cell_size
        return grid_px_w + self.panel_w, max(grid_px_h, 620)

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits the window and place the grid on the left."""
        avail_w = max(1, win_w - self.panel_w - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        cs_by_w = avail_w // max(1, self.editor.cols)
        cs_by_h = avail_h // max(1, self.editor.rows)
        self.cell_size = max(MIN_CELL_SIZE, min(cs_by_w, cs_by_h))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN*2 + self.editor.cols * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(self.panel_w, win_w - grid_right), win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        px, py = pos
        if px < ox or py < oy:
            return None
        c = ((px - ox) // self.cell_size, (py - oy) // self.cell_size)
        return c if self.editor.in_bounds(c) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _ensure_search(self) -> bool:
        if self.search is not None:
            return True
        if not self.editor.endpoints_valid():
            self.status_text = "Start or end lies outside the grid."
            logger.warning("Endpoints %s -> %s outside %dx%d grid", self.editor.start,
                           self.editor.end, self.editor.cols, self.editor.rows)
            return False
        self.search = self.editor.new_search(self.grid)
        return True

    def _do_step(self):
        if not self._ensure_search():
            self.running = False
            return
        res = self.search.step()
        self.open_set = set(self.search.frontier.coords())
        self.closed_set.update(res.closed)
        if res.path is not None:
            self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        self._last_metrics = res.metrics
        self._refresh_active_states()

    def _solve(self):
        if not self.editor.endpoints_valid():
            self._ensure_search()
            return
        self._reset()
        outcome = self.editor.run()
        self.path = outcome.path
        self._last_metrics = outcome.metrics
        self.state = "Done" if outcome.found else "No path"
        self.status_text = outcome.message

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                if e.type == pygame.MOUSEBUTTONDOWN:
                    self._handle_grid_click(e)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self._do_step()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._solve()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_c:
            self.editor.clear_walls(); self._rebuild()
        elif key == pygame.K_g:
            self._toggle_diagonals()
        elif key == pygame.K_h:
            self._cycle_heuristic()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-1)
        elif key == pygame.K_RIGHTBRACKET:
            self._resize(self.editor.length + 1)
        elif key == pygame.K_LEFTBRACKET:
            self._resize(self.editor.length - 1)

    def _handle_grid_click(self, e: pygame.event.Event):
        c = self._cell_at(e.pos)
        if c is None:
            return
        if e.button == 1:
            self.editor.toggle_wall(c)
        elif e.button == 3:
            self.editor.place_endpoint(c)
        else:
            return
        self._rebuild()

    # ---------- state changes ----------
    def _rebuild(self):
        """New grid for the new configuration; any in-flight search is dropped."""
        self.grid = self.editor.build_grid()
        self._reset()

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.search = None
        self._reset_overlays()
        self._refresh_active_states()

    def _reset_overlays(self):
        self.open_set.clear()
        self.closed_set.clear()
        self.path = []
        self.status_text = ""
        self._last_metrics = {
            "algo": self.editor.algo_name,
            "popped": 0,
            "open_size": 0,
            "closed_count": 0,
            "path_len": 0,
            "total_cost": None,
        }

    def _resize(self, length: int):
        if length < 1 or length == self.editor.length:
            return
        self.editor.set_size(length)
        w, h = self._window_size_for(self.editor)
        self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
        self._layout(w, h)
        self._rebuild()

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _toggle_diagonals(self):
        self.editor.toggle_diagonals()
        self._reset()

    def _cycle_heuristic(self):
        self.editor.cycle_heuristic()
        self._reset()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        start, end = self.editor.start, self.editor.end
        label = cs >= 28

        for cell in self.grid:
            col, row = cell.coord
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            if not cell.passable:
                color = WALL_GREY
            elif cell.coord == start:
                color = START_GREEN
            elif cell.coord == end:
                color = END_RED
            else:
                color = FLOOR
            pygame.draw.rect(self.screen, BLACK, rect)
            pygame.draw.rect(self.screen, color, rect.inflate(-2, -2))

        # overlays
        for (col,row) in self.closed_set:
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(CLOSED_MAG_A)
            self.screen.blit(s, (ox + col*cs, oy + row*cs))

        for (col,row) in self.open_set:
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(OPEN_CYAN_A)
            self.screen.blit(s, (ox + col*cs, oy + row*cs))

        for (col,row) in self.path:
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            pygame.draw.rect(self.screen, PATH_PURPLE, rect.inflate(-2, -2))

        if label:
            for cell in self.grid:
                col, row = cell.coord
                txt = self.font_small.render(f"{col},{row}", True,
                                             WHITE if cell.coord in self.path else BLACK)
                self.screen.blit(txt, (ox + col*cs + 2, oy + row*cs + cs//2 - txt.get_height()//2))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Solve (timed)", self._solve); y += h + gap
        add("Reset", self._reset); y += h + gap
        add("Diagonals", self._toggle_diagonals, togglable=True, store_as="btn_diag"); y += h + gap
        add("Next Heuristic", self._cycle_heuristic); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap
        self._buttons.append(UIButton("Size -", pygame.Rect(x, y, half, h), lambda: self._resize(self.editor.length - 1)))
        self._buttons.append(UIButton("Size +", pygame.Rect(x + half + 8, y, half, h), lambda: self._resize(self.editor.length + 1)))

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        if hasattr(self, "btn_diag"):
            self.btn_diag.set_active(self.editor.diagonals)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 230
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"State: {self.state}")
        line(f"Popped: {m.get('popped', 0)}   Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']}")
        line(f"Algo: {self.editor.algo_name}   Diagonals: {'on' if self.editor.diagonals else 'off'}")
        line(f"Grid: {self.editor.cols}x{self.editor.rows}   Speed: {self.steps_per_sec} steps/s")
        if self.status_text:
            line(self.status_text, color=ACCENT_GOLD)

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def build_editor(config: Config) -> Editor:
    return Editor.with_length(
        config.grid.length,
        diagonals=config.grid.diagonals,
        heuristic=config.grid.heuristic,
    )


def main(argv: Optional[List[str]] = None, config: Optional[Config] = None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = apply_cli_overrides(config or load_config(), argv)
    except ValueError as ex:
        print(f"Invalid configuration: {ex}", file=sys.stderr)
        sys.exit(2)
    configure_logging(config.logging)
    logger.info("Starting viewer: %dx%d grid, diagonals=%s, heuristic=%s",
                config.grid.length * CELLS_PER_LENGTH, config.grid.length * CELLS_PER_LENGTH,
                config.grid.diagonals, config.grid.heuristic)
    Viewer(build_editor(config), config).run()


if __name__ == "__main__":
    main()
