#!/usr/bin/env python3
"""
Maze & Pathfinding Viewer

- Mouse:
    drag              -> paint / erase walls
    [SHIFT]+click     -> place start
    [CTRL]/[ALT]+click-> place end
- Keyboard:
    [1]/[2]/[3]       -> maze type (DFS backtracking / Prim's / binary tree)
    [B]/[J]/[A]/[F]   -> algorithm (BFS / Dijkstra / A* / DFS)
    [G]               -> generate maze
    [SPACE]           -> visualize path
    [C]               -> clear path
    [R]               -> reset grid
    [+]/[-]           -> speed
    [Q]/[ESC]         -> quit

Settings come from mazeviz.config (env vars / --key=value).
"""

import sys
from typing import List, Optional, Tuple

import pygame

from mazeviz.app.explainer import Explainer, Explanation, UNAVAILABLE_TEXT
from mazeviz.app.playback import (
    apply_maze_step, apply_path_step, finish_maze, speed_setting_to_delay,
    MIN_DELAY_MS, MAX_DELAY_MS,
)
from mazeviz.config import Settings, resolve_settings
from mazeviz.core import maze as maze_gen
from mazeviz.core import pathfinding
from mazeviz.core.grid import Grid
from mazeviz.core.sequencer import Playback, Sequencer
from mazeviz.core.types import (
    RunStats, EMPTY, WALL, START, END, VISITED, FRONTIER, PATH,
)

# ---------- Config ----------
PANEL_W = 380            # right band: metrics + buttons + explanation
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 20
MIN_WIN_H = 780
FONT_NAME = None  # default pygame font
SPEED_STEP = 15

MAZE_LABELS = {
    maze_gen.DFS_BACKTRACKING: "DFS maze",
    maze_gen.PRIMS: "Prim's",
    maze_gen.BINARY_TREE: "Binary tree",
}

# Colors
WHITE       = (255, 255, 255)
BLACK       = (  0,   0,   0)
GRID_LINE   = (225, 225, 225)
CELL_COLORS = {
    EMPTY:    (255, 255, 255),
    WALL:     (  0,   0,   0),
    START:    ( 22, 163,  74),
    END:      (220,  38,  38),
    VISITED:  (191, 219, 254),
    FRONTIER: ( 29,  78, 216),
    PATH:     (250, 204,  21),
}

CARD_BG     = (24, 28, 36, 220)
CARD_HI     = (255, 255, 255, 18)
TEXT_LIGHT  = (230, 235, 240)
TEXT_DIM    = (160, 168, 180)
ACCENT_GOLD = (255, 210, 0)


def wrap_text(text: str, font: "pygame.font.Font", width: int) -> List[str]:
    lines: List[str] = []
    for para in text.splitlines() or [""]:
        words = para.split()
        cur = ""
        for w in words:
            cand = f"{cur} {w}" if cur else w
            if font.size(cand)[0] <= width or not cur:
                cur = cand
            else:
                lines.append(cur)
                cur = w
        lines.append(cur)
    return lines


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
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
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
    def __init__(self, settings: Settings):
        pygame.init()

        self.settings = settings
        self.grid = Grid(settings.rows, settings.cols)
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 19)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        self.selected_maze = settings.maze
        self.selected_algo = settings.algorithm
        self.speed_setting = settings.speed
        self.sequencer = Sequencer(speed_ms=speed_setting_to_delay(self.speed_setting))
        self.playback: Optional[Playback] = None
        self.playback_kind: Optional[str] = None   # "maze" | "path"

        self.stats: Optional[RunStats] = None
        self.stats_algo: Optional[str] = None
        self.run_id = 0   # tags explanation requests; bumped per path run
        self.explainer = Explainer(settings.explain_url)
        self.explanation: Optional[Explanation] = None
        self.status = "Idle"

        self.mouse_down = False
        self.drawing_wall = True

        self._buttons: List[UIButton] = []

        cell = CELL_SIZE_DEFAULT
        win_w = GRID_MARGIN * 2 + self.grid.cols * cell + PANEL_W
        win_h = max(GRID_MARGIN * 2 + self.grid.rows * cell, MIN_WIN_H)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Maze & Pathfinding Visualizer")
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(4, min(avail_w // self.grid.cols, avail_h // self.grid.rows))

        self.grid_rect = pygame.Rect(GRID_MARGIN, GRID_MARGIN,
                                     self.grid.cols * self.cell_size,
                                     self.grid.rows * self.cell_size)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)
        self._build_buttons()

    def cell_at(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Pixel -> (row, col), clamped to the grid."""
        x, y = pos
        col = (x - self.grid_rect.x) // self.cell_size
        row = (y - self.grid_rect.y) // self.cell_size
        return (min(self.grid.rows - 1, max(0, row)),
                min(self.grid.cols - 1, max(0, col)))

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._tick_playback()
            self._collect_explanation()
            self._draw()
            self.clock.tick(60)

    def _tick_playback(self):
        if self.playback is None:
            return
        for step in self.playback.poll():
            if self.playback_kind == "maze":
                apply_maze_step(self.grid, step)
            else:
                apply_path_step(self.grid, step)
        if self.playback.done:
            if self.playback_kind == "maze":
                finish_maze(self.grid)
                self.status = "Maze ready"
            else:
                self.status = "Done" if self.stats and self.stats.path_length else "No path"
            self.playback = None
            self.playback_kind = None

    def _collect_explanation(self):
        result = self.explainer.poll()
        if result is not None and result.run_id == self.run_id:
            self.explanation = result

    # ---------- actions ----------
    def _cancel_playback(self):
        self.sequencer.cancel()
        self.playback = None
        self.playback_kind = None

    def generate_maze(self):
        self._cancel_playback()
        steps = maze_gen.generate(self.grid.rows, self.grid.cols, self.selected_maze)
        if not steps:
            return
        self.grid.reset_visits()
        self.playback = self.sequencer.play(steps)
        self.playback_kind = "maze"
        self.status = f"Generating ({MAZE_LABELS[self.selected_maze]})"

    def visualize(self):
        if self.grid.start is None or self.grid.end is None:
            self.status = "Place start (shift) and end (ctrl) first"
            return
        self._cancel_playback()
        self.grid.reset_visits()

        result = pathfinding.run(self.grid, self.selected_algo, self.grid.start, self.grid.end)
        self.stats = result.stats
        self.stats_algo = self.selected_algo
        self.run_id += 1
        self.explanation = None
        self.playback = self.sequencer.play(result.steps)
        self.playback_kind = "path"
        self.status = "Running"
        self.explainer.request(self.selected_algo, self.selected_maze, result.stats, run_id=self.run_id)

    def clear_path(self):
        self._cancel_playback()
        self.grid.reset_visits()
        self.status = "Idle"

    def reset_grid(self):
        self._cancel_playback()
        self.grid = Grid(self.settings.rows, self.settings.cols)
        self.stats = None
        self.stats_algo = None
        self.run_id += 1   # drop replies still in flight
        self.explanation = None
        self.status = "Idle"

    def _select_maze(self, key: str):
        self.selected_maze = key
        self._refresh_active_states()

    def _select_algo(self, key: str):
        self.selected_algo = key
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.speed_setting = int(max(MIN_DELAY_MS, min(MAX_DELAY_MS, self.speed_setting + dv)))
        self.sequencer.set_speed(speed_setting_to_delay(self.speed_setting))

    # ---------- input ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e)
            elif e.type == pygame.VIDEORESIZE:
                w, h = max(PANEL_W + 200, e.w), max(MIN_WIN_H, e.h)
                self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
                self._layout(w, h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                clicked = False
                if e.type != pygame.MOUSEBUTTONUP:
                    for b in self._buttons:
                        clicked = b.handle_mouse(e) or clicked
                if not clicked:
                    self._handle_grid_mouse(e)

    def _handle_key(self, e: pygame.event.Event):
        keys = {
            pygame.K_1: lambda: self._select_maze(maze_gen.DFS_BACKTRACKING),
            pygame.K_2: lambda: self._select_maze(maze_gen.PRIMS),
            pygame.K_3: lambda: self._select_maze(maze_gen.BINARY_TREE),
            pygame.K_b: lambda: self._select_algo(pathfinding.BFS),
            pygame.K_j: lambda: self._select_algo(pathfinding.DIJKSTRA),
            pygame.K_a: lambda: self._select_algo(pathfinding.ASTAR),
            pygame.K_f: lambda: self._select_algo(pathfinding.DFS),
            pygame.K_g: self.generate_maze,
            pygame.K_SPACE: self.visualize,
            pygame.K_c: self.clear_path,
            pygame.K_r: self.reset_grid,
            pygame.K_PLUS: lambda: self._bump_speed(+SPEED_STEP),
            pygame.K_EQUALS: lambda: self._bump_speed(+SPEED_STEP),
            pygame.K_MINUS: lambda: self._bump_speed(-SPEED_STEP),
            pygame.K_UNDERSCORE: lambda: self._bump_speed(-SPEED_STEP),
        }
        if e.key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        action = keys.get(e.key)
        if action:
            action()

    def _handle_grid_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self.mouse_down = False
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            if not self.grid_rect.collidepoint(e.pos):
                return
            self.mouse_down = True
            row, col = self.cell_at(e.pos)
            mods = pygame.key.get_mods()
            if mods & pygame.KMOD_SHIFT:
                self.grid.set_start(row, col)
                self.mouse_down = False
            elif mods & (pygame.KMOD_CTRL | pygame.KMOD_ALT):
                self.grid.set_end(row, col)
                self.mouse_down = False
            else:
                self.drawing_wall = self.grid.cell(row, col).type != WALL
                self.grid.set_wall(row, col, self.drawing_wall)
        elif e.type == pygame.MOUSEMOTION and self.mouse_down:
            row, col = self.cell_at(e.pos)
            self.grid.set_wall(row, col, self.drawing_wall)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_panel()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h - 1)
            c = tuple(int(top[i] + (bot[i] - top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self.grid_rect.topleft
        for cell in self.grid:
            rect = pygame.Rect(ox + cell.col * cs, oy + cell.row * cs, cs, cs)
            pygame.draw.rect(self.screen, CELL_COLORS.get(cell.type, WHITE), rect)
            if cs >= 8:
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _draw_card(self, y: int, height: int) -> pygame.Rect:
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, height), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0, 0))
        self.screen.blit(card, (rb.x + 10, y))
        return pygame.Rect(rb.x + 10, y, card.get_width(), height)

    def _draw_panel(self):
        rb = self._right_band
        self._draw_card(rb.y + 10, 200)

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, font=None, color=TEXT_LIGHT):
            nonlocal y0
            surf = (font or self.font).render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 5

        line("Run stats", self.font_big, ACCENT_GOLD)
        if self.stats is not None:
            line(f"Algorithm: {pathfinding.LABELS[self.stats_algo]}")
            line(f"Visited: {self.stats.visited_count}")
            line(f"Path length: {self.stats.path_length or '-'}")
            line(f"Runtime: {self.stats.runtime_ms:.2f} ms")
        else:
            line("No run yet", color=TEXT_DIM)
        line(f"Status: {self.status}")
        line(f"Delay: {self.sequencer.speed_ms:.0f} ms/step", color=TEXT_DIM)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)

        self._draw_explanation()

    def _draw_explanation(self):
        rb = self._right_band
        top = self._buttons_bottom + 12
        height = max(60, rb.bottom - top - 10)
        card = self._draw_card(top, height)
        x0, y0 = card.x + 14, card.y + 8
        width = card.width - 28

        title = self.font.render("Explanation", True, ACCENT_GOLD)
        self.screen.blit(title, (x0, y0))
        y0 += title.get_height() + 6

        if not self.explainer.enabled:
            text = "Set MAZEVIZ_EXPLAIN_URL to enable explanations."
        elif self.explanation is None:
            text = "Waiting for a run..." if self.stats is None else "Asking..."
        elif self.explanation.unavailable:
            text = UNAVAILABLE_TEXT
        else:
            ex = self.explanation
            text = "\n".join(s for s in (ex.what_algorithm_does, ex.what_happened_this_run, ex.comparison) if s)

        for ln in wrap_text(text, self.font_small, width):
            if y0 > card.bottom - 18:
                break
            surf = self.font_small.render(ln, True, TEXT_LIGHT)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 3

    # ---------- buttons ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 222  # below the stats card
        w = rb.width - 32
        half = (w - 8) // 2
        h = 32
        gap = 8

        def add(label, cb, col=0, width=w, *, togglable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x + col * (half + 8), y, width, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Visualize", self.visualize, 0, half)
        add("Generate Maze", self.generate_maze, 1, half); y += h + gap
        add("Clear Path", self.clear_path, 0, half)
        add("Reset Grid", self.reset_grid, 1, half); y += h + gap
        add("Speed -", lambda: self._bump_speed(-SPEED_STEP), 0, half)
        add("Speed +", lambda: self._bump_speed(+SPEED_STEP), 1, half); y += h + gap

        add("BFS", lambda: self._select_algo(pathfinding.BFS), 0, half, togglable=True, store_as="btn_bfs")
        add("Dijkstra", lambda: self._select_algo(pathfinding.DIJKSTRA), 1, half, togglable=True, store_as="btn_dijkstra"); y += h + gap
        add("A*", lambda: self._select_algo(pathfinding.ASTAR), 0, half, togglable=True, store_as="btn_astar")
        add("DFS", lambda: self._select_algo(pathfinding.DFS), 1, half, togglable=True, store_as="btn_dfs"); y += h + gap

        add(MAZE_LABELS[maze_gen.DFS_BACKTRACKING], lambda: self._select_maze(maze_gen.DFS_BACKTRACKING),
            0, half, togglable=True, store_as="btn_maze_dfs")
        add(MAZE_LABELS[maze_gen.PRIMS], lambda: self._select_maze(maze_gen.PRIMS),
            1, half, togglable=True, store_as="btn_maze_prims"); y += h + gap
        add(MAZE_LABELS[maze_gen.BINARY_TREE], lambda: self._select_maze(maze_gen.BINARY_TREE),
            0, half, togglable=True, store_as="btn_maze_binary"); y += h

        self._buttons_bottom = y
        self._refresh_active_states()

    def _refresh_active_states(self):
        algo_buttons = {
            pathfinding.BFS: "btn_bfs",
            pathfinding.DIJKSTRA: "btn_dijkstra",
            pathfinding.ASTAR: "btn_astar",
            pathfinding.DFS: "btn_dfs",
        }
        for key, attr in algo_buttons.items():
            if hasattr(self, attr):
                getattr(self, attr).set_active(self.selected_algo == key)

        maze_buttons = {
            maze_gen.DFS_BACKTRACKING: "btn_maze_dfs",
            maze_gen.PRIMS: "btn_maze_prims",
            maze_gen.BINARY_TREE: "btn_maze_binary",
        }
        for key, attr in maze_buttons.items():
            if hasattr(self, attr):
                getattr(self, attr).set_active(self.selected_maze == key)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    settings = resolve_settings(argv)
    Viewer(settings).run()


if __name__ == "__main__":
    main()
