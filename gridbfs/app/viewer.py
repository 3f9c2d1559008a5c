# gridbfs/app/viewer.py
#!/usr/bin/env python3
"""
BFS Grid Viewer — Controls + Metrics

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> restart on the same grid
    [G]          -> randomize a new grid
    [+]/[-]      -> faster / slower
    [[]/[]]      -> fewer / more obstacles (applies on next randomize)
    [1]/[2]/[3]  -> load a preset map
    [Q]/[ESC]    -> quit
"""

# --- bootstrap import path so `from gridbfs...` works when run as a script ---
import sys, time
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

import logging
from typing import Optional, Tuple
import pygame

from gridbfs.config import Settings, clamp_density
from gridbfs.core.errors import GridSearchError
from gridbfs.core.maps import MAP_FILES, load_map
from gridbfs.core.scheduler import StepScheduler
from gridbfs.core.session import SearchSession
from gridbfs.core.types import CellKind, Status, StepResult

log = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CANVAS_PX = 720          # initial grid plate edge
FONT_NAME = None         # default pygame font
DENSITY_STEP = 0.05
MS_STEP = 5

# Colors
BACKGROUND  = ( 42, 42, 42)
GRID_LINE   = (255,255,255, 80)
CELL_COLORS = {
    CellKind.FREE:        (140,140,140),
    CellKind.BLOCKED:     ( 30, 30, 30),
    CellKind.SOURCE:      (255, 40, 40),
    CellKind.DESTINATION: ( 80,255, 80),
    CellKind.VISITING:    ( 64, 64, 64),
    CellKind.PATH:        (128,182, 80),
}

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

STATUS_LABELS = {
    Status.IDLE:      "Idle",
    Status.RUNNING:   "Running",
    Status.FOUND:     "Found",
    Status.EXHAUSTED: "No path",
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

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()

# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: SearchSession, scheduler: StepScheduler):
        pygame.init()

        self.session = session
        self.scheduler = scheduler
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w = CANVAS_PX + PANEL_W
        win_h = CANVAS_PX
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("BFS — Grid Search")

        self._buttons: list[UIButton] = []
        self.selected_map_key = "random"
        self.clock = pygame.time.Clock()
        self._last_metrics = self.session.stepper.metrics()
        self.scheduler.subscribe(self._on_step)

        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute an integer cell size that fits the window; grid on the left."""
        n = self.session.grid.size
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(4, min(avail_w // n, avail_h // n))

        plate = n * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - plate) // 2)
        self.canvas_rect = pygame.Rect(0, top_y, plate, plate)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            self.scheduler.tick(time.monotonic())
            self._draw()
            self.clock.tick(60)

    def _on_step(self, res: StepResult):
        if res.metrics:
            self._last_metrics = res.metrics
        if res.status.is_terminal:
            self._refresh_active_states()

    # ---------- actions ----------
    def _toggle_run(self):
        if self.session.is_terminal:
            return
        self.scheduler.toggle()
        self._refresh_active_states()

    def _step_once(self):
        self.scheduler.pause()
        self.scheduler.step_once()
        self._refresh_active_states()

    def _restart(self):
        self.scheduler.cancel()
        self.session.restart()
        self._last_metrics = self.session.stepper.metrics()
        self._refresh_active_states()

    def _randomize(self):
        self.scheduler.cancel()
        try:
            self.session.randomize()
        except GridSearchError as ex:
            log.error("randomize failed: %s", ex)
            print(f"Failed to randomize grid: {ex}")
            return
        self.selected_map_key = "random"
        self._after_new_grid()
        self.scheduler.start()
        self._refresh_active_states()

    def _switch_map(self, key: str):
        if key not in MAP_FILES: return
        self.scheduler.cancel()
        try:
            grid = load_map(MAP_FILES[key])
        except (OSError, ValueError, KeyError, GridSearchError) as ex:
            log.error("failed to load map %s: %s", key, ex)
            print(f"Failed to load map {key}: {ex}")
            return
        self.session.load(grid)
        self.selected_map_key = key
        pygame.display.set_caption(f"BFS — {key}")
        self._after_new_grid()

    def _after_new_grid(self):
        self._last_metrics = self.session.stepper.metrics()
        self._layout(*self.screen.get_size())
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        # faster means a shorter interval
        self.scheduler.set_interval_ms(self.scheduler.interval_ms - dv * MS_STEP)

    def _bump_density(self, dv: int):
        self.session.density = clamp_density(round(self.session.density + dv * DENSITY_STEP, 2))

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
                    self._step_once()
                elif e.key == pygame.K_r:
                    self._restart()
                elif e.key == pygame.K_g:
                    self._randomize()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_RIGHTBRACKET:
                    self._bump_density(+1)
                elif e.key == pygame.K_LEFTBRACKET:
                    self._bump_density(-1)
                elif e.key == pygame.K_1:
                    self._switch_map("01_open_field")
                elif e.key == pygame.K_2:
                    self._switch_map("02_wall_gap")
                elif e.key == pygame.K_3:
                    self._switch_map("03_sealed")
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(480, e.w), max(360, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(BACKGROUND)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        grid = self.session.grid
        cs = self.cell_size
        ox, oy = self._grid_origin

        for row in range(grid.size):
            for col in range(grid.size):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                pygame.draw.rect(self.screen, CELL_COLORS[grid.classify((col, row))], rect)

        lines = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        edge = grid.size * cs
        for i in range(grid.size + 1):
            pygame.draw.line(lines, GRID_LINE, (ox + i*cs, oy), (ox + i*cs, oy + edge))
            pygame.draw.line(lines, GRID_LINE, (ox, oy + i*cs), (ox + edge, oy + i*cs))
        self.screen.blit(lines, (0, 0))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 260  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        def add_pair(left: Tuple[str, object], right: Tuple[str, object]):
            half = (w - 8) // 2
            self._buttons.append(UIButton(left[0],  pygame.Rect(x, y, half, h), left[1]))
            self._buttons.append(UIButton(right[0], pygame.Rect(x + half + 8, y, half, h), right[1]))

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._step_once);   y += h + gap
        add("Restart", self._restart);       y += h + gap
        add("Randomize", self._randomize, togglable=True, store_as="btn_random"); y += h + gap
        add_pair(("Speed −", lambda: self._bump_speed(-1)), ("Speed +", lambda: self._bump_speed(+1))); y += h + gap
        add_pair(("Blocks −", lambda: self._bump_density(-1)), ("Blocks +", lambda: self._bump_density(+1))); y += h + gap
        add("Map 1: Open field", lambda: self._switch_map("01_open_field"), togglable=True, store_as="btn_map1"); y += h + gap
        add("Map 2: Wall gap",   lambda: self._switch_map("02_wall_gap"),   togglable=True, store_as="btn_map2"); y += h + gap
        add("Map 3: Sealed",     lambda: self._switch_map("03_sealed"),     togglable=True, store_as="btn_map3")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.scheduler.running)
        if hasattr(self, "btn_random"):
            self.btn_random.set_active(self.selected_map_key == "random")
        if hasattr(self, "btn_map1"):
            self.btn_map1.set_active(self.selected_map_key == "01_open_field")
        if hasattr(self, "btn_map2"):
            self.btn_map2.set_active(self.selected_map_key == "02_wall_gap")
        if hasattr(self, "btn_map3"):
            self.btn_map3.set_active(self.selected_map_key == "03_sealed")

    def _status_label(self) -> str:
        status = self.session.status
        if status == Status.RUNNING and not self.scheduler.running:
            return "Paused"
        return STATUS_LABELS[status]

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 240
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
        line(f"Status: {self._status_label()}")
        line(f"Expanded: {m.get('popped', 0)}  (dupes {m.get('skipped', 0)})")
        line(f"Frontier: {m.get('frontier_size', 0)}")
        line(f"Visited: {m.get('visited_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line("-" * 26)
        n = self.session.grid.size
        line(f"Grid: {n}x{n}   Blocks: {self.session.density:.2f}")
        line(f"Speed: {self.scheduler.interval_ms} ms/step")

        for b in self._buttons:
            b.draw(self.screen, self.font)

# ---------- main ----------
def main(settings: Optional[Settings] = None):
    settings = settings or Settings()
    session = SearchSession(settings)
    try:
        if settings.map_path is not None:
            session.load(load_map(settings.map_path))
        else:
            session.randomize()
    except (OSError, ValueError, KeyError, GridSearchError) as ex:
        log.error("failed to build the first grid: %s", ex)
        print(f"Failed to build grid: {ex}")
        sys.exit(1)
    scheduler = StepScheduler(session, settings.step_interval_ms)
    viewer = Viewer(session, scheduler)
    scheduler.start()
    viewer._refresh_active_states()
    viewer.run()

if __name__ == "__main__":
    from gridbfs.config import resolve_settings
    from gridbfs.log import setup_logging
    _settings = resolve_settings()
    setup_logging(_settings.log_level)
    main(_settings)
