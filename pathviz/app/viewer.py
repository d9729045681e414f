# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Viewer: grid, overlays, step log, stats

- Keyboard:
    [1]..[6]     -> select algorithm (A*, Best-First, Greedy, Hill Climbing, IDA*, SMA*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> new grid (reloads --map if one was given)
    [+]/[-]      -> speed
    [Q]/[ESC]    -> quit

Options (CLI --name=value or ENV PATHVIZ_<NAME>):
    algo, map, size, seed, speed

The viewer is a pure consumer: it drives a SearchRun one suspension point
per tick and draws whatever the run's Trace holds.
"""

import logging
import random
import sys
import time
from typing import Dict, List, Optional

import pygame

from pathviz.core.algorithms import Algorithm, DESCRIPTIONS
from pathviz.core.config import (
    DEFAULT_ALGORITHM, DEFAULT_SPEED, GRID_SIZE, WALL_PROBABILITY, resolve_int, resolve_option,
)
from pathviz.core.maps import load_map, random_grid
from pathviz.core.runner import SPEED_MAX, SPEED_MIN, SearchRun, speed_to_delay
from pathviz.core.types import Cell, Grid, InvalidGrid

logger = logging.getLogger(__name__)

PANEL_W = 460            # right band: metrics + log + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

ALGO_KEYS = {
    pygame.K_1: Algorithm.ASTAR,
    pygame.K_2: Algorithm.BEST_FIRST,
    pygame.K_3: Algorithm.GREEDY,
    pygame.K_4: Algorithm.HILL_CLIMBING,
    pygame.K_5: Algorithm.IDASTAR,
    pygame.K_6: Algorithm.SMASTAR,
}

# Colors
WHITE       = (255,255,255)
START_GREEN = ( 21,165, 74)
GOAL_RED    = (239, 68, 68)
WALL_GRAY   = ( 31, 41, 55)
PATH_AMBER  = (251,191, 36)
VISITED_BLUE= (147,197,253)
CURRENT_ORG = (245,158, 11)
BORDER      = ( 51, 65, 85)
BG          = ( 15, 23, 42)

TEXT_LIGHT  = (226,232,240)
TEXT_DIM    = (148,163,184)
ACCENT_GOLD = (255,210,  0)


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
        if self.active and self.togglable:
            bg = (59, 130, 246)
        elif self.hover:
            bg = (71, 85, 105)
        else:
            bg = (51, 65, 85)
        pygame.draw.rect(screen, bg, self.rect, border_radius=6)
        text = font.render(self.label, True, WHITE)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, algorithm: Algorithm, speed: int = DEFAULT_SPEED,
                 map_path: Optional[str] = None, seed: Optional[int] = None):
        pygame.init()

        self.grid = grid
        self.map_path = map_path
        self.rng = random.Random(seed)
        self.cell_size = max(8, min(CELL_SIZE_DEFAULT, (720 - GRID_MARGIN*2) // grid.size))
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        grid_px = GRID_MARGIN*2 + grid.size * self.cell_size
        self.screen = pygame.display.set_mode((grid_px + PANEL_W, max(grid_px, 720)))
        pygame.display.set_caption("Pathfinding Visualizer")

        self.selected_algo = algorithm
        self.speed = speed
        self.running = False
        self.state = "Idle"
        self.clock = pygame.time.Clock()
        self._last_step_t = 0.0

        self.run = SearchRun(self.grid, self.selected_algo)
        self._buttons: List[UIButton] = []
        self._build_buttons()

    # ---------- main loop ----------
    def loop(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= speed_to_delay(self.speed):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        if self.state in ("Done", "No path", "Failed"):
            return
        if not self.run.running:
            try:
                self.run.start()
            except InvalidGrid as ex:
                logger.error("cannot start: %s", ex)
                self.state = "Failed"; self.running = False
                return
        if not self.run.advance():
            self.running = False
            if self.run.failed:
                self.state = "Failed"
            elif self.run.stats and self.run.stats.success:
                self.state = "Done"
            else:
                self.state = "No path"
        self._refresh_active_states()

    # ---------- controls ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._new_grid()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+5)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-5)
                elif e.key in ALGO_KEYS:
                    self._switch_algo(ALGO_KEYS[e.key])
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _toggle_run(self):
        if self.state in ("Done", "No path", "Failed"):
            self._reset_run()
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.speed = int(max(SPEED_MIN, min(SPEED_MAX, self.speed + dv)))

    def _switch_algo(self, algo: Algorithm):
        if self.run.running and self.running:
            return  # selector is locked while a run is animating
        self.selected_algo = algo
        self._reset_run()

    def _new_grid(self):
        try:
            if self.map_path:
                self.grid = load_map(self.map_path)
            else:
                self.grid = random_grid(self.grid.size, WALL_PROBABILITY, rng=self.rng)
        except (OSError, InvalidGrid) as ex:
            logger.error("failed to load grid: %s", ex)
            return
        self._reset_run()

    def _reset_run(self):
        self.run.cancel()
        self.run = SearchRun(self.grid, self.selected_algo)
        self.running = False
        self.state = "Idle"
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(BG)
        self._draw_grid()
        self._draw_panel()
        pygame.display.flip()

    def _cell_rect(self, c: Cell) -> pygame.Rect:
        cs = self.cell_size
        x, y = c
        return pygame.Rect(GRID_MARGIN + x*cs, GRID_MARGIN + y*cs, cs, cs)

    def _draw_grid(self):
        trace = self.run.trace
        on_path = set(trace.path)
        for y in range(self.grid.size):
            for x in range(self.grid.size):
                c = (x, y)
                if c == self.grid.start:
                    color = START_GREEN
                elif c == self.grid.goal:
                    color = GOAL_RED
                elif self.grid.is_wall(c):
                    color = WALL_GRAY
                elif c in on_path:
                    color = PATH_AMBER
                elif c == trace.current and self.run.running:
                    color = CURRENT_ORG
                elif c in trace.visited:
                    color = VISITED_BLUE
                else:
                    color = WHITE
                rect = self._cell_rect(c)
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, BORDER, rect, 1)

    def _build_buttons(self):
        self._buttons.clear()
        grid_px = GRID_MARGIN*2 + self.grid.size * self.cell_size
        x = grid_px + 16
        w = PANEL_W - 32
        h = 30
        gap = 6
        y = 16

        def add(label, cb, *, togglable=False, width=w, dx=0):
            btn = UIButton(label, pygame.Rect(x + dx, y, width, h), cb, togglable=togglable)
            self._buttons.append(btn)
            return btn

        self.btn_run = add("Run / Pause", self._toggle_run, togglable=True); y += h + gap
        half = (w - gap) // 2
        add("Step Once", self._do_step, width=half)
        add("New Grid", self._new_grid, width=half, dx=half + gap); y += h + gap
        add("Speed -", lambda: self._bump_speed(-5), width=half)
        add("Speed +", lambda: self._bump_speed(+5), width=half, dx=half + gap); y += h + gap

        self._algo_buttons: Dict[Algorithm, UIButton] = {}
        for i, algo in enumerate(Algorithm):
            col, row = i % 2, i // 2
            btn = UIButton(DESCRIPTIONS[algo].split(":")[0],
                           pygame.Rect(x + col*(half + gap), y + row*(h + gap), half, h),
                           lambda a=algo: self._switch_algo(a), togglable=True)
            self._buttons.append(btn)
            self._algo_buttons[algo] = btn
        self._panel_text_y = y + 3*(h + gap) + 8
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        for algo, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(algo == self.selected_algo)

    def _draw_panel(self):
        for b in self._buttons:
            b.draw(self.screen, self.font_small)

        grid_px = GRID_MARGIN*2 + self.grid.size * self.cell_size
        x0 = grid_px + 20
        y0 = self._panel_text_y

        def line(text, font=None, color=TEXT_LIGHT):
            nonlocal y0
            surf = (font or self.font).render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 4

        line(DESCRIPTIONS[self.selected_algo], self.font_big, ACCENT_GOLD)
        line(f"State: {self.state}   Speed: {self.speed}%")

        stats = self.run.stats
        if stats is not None:
            line(f"Explored: {stats.nodes_explored}   Path: {stats.path_length}")
            line(f"Time: {stats.elapsed_ms:.1f} ms   " + ("Success" if stats.success else "Failed"))
        elif self.run.algo is not None:
            line(f"Explored: {self.run.algo.nodes_explored}")

        tree = self.run.trace.tree()
        depth = max((n.depth for n in tree.walk()), default=0)
        line(f"Tree: {tree.size()} nodes, depth {depth}", self.font_small, TEXT_DIM)

        line("-" * 40, self.font_small, TEXT_DIM)
        for ev in list(self.run.trace.steps)[-14:]:
            line(ev.message, self.font_small)


# ---------- main ----------
def build_grid(map_path: Optional[str], size: int, seed: Optional[int]) -> Grid:
    if map_path:
        return load_map(map_path)
    return random_grid(size, WALL_PROBABILITY, rng=random.Random(seed))


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        algo = Algorithm(resolve_option("algo", DEFAULT_ALGORITHM))
        seed_raw = resolve_option("seed")
        seed = int(seed_raw) if seed_raw else None
        map_path = resolve_option("map")
        grid = build_grid(map_path, resolve_int("size", GRID_SIZE), seed)
        speed = resolve_int("speed", DEFAULT_SPEED)
    except (OSError, ValueError) as ex:
        print(f"Failed to set up viewer: {ex}")
        sys.exit(1)
    Viewer(grid, algo, speed, map_path=map_path, seed=seed).loop()


if __name__ == "__main__":
    main()
