from __future__ import annotations

import logging
import math
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from .config import CFG, persist_windowed_size, save_config
from .constants import *
from .input_queue import EventQueue, InputQueue
from .models import Cell, CloneKind, Direction, Objective, Outcome, Scene
from .music import MusicController, SfxBank
from .records import best_escape, best_time, leaderboard, record_outcome, reset_records
from .session import GameSession, RunState
from .settings import clamp_settings, commit_settings, cycle_objective, make_runtime_settings

logger = logging.getLogger(__name__)

KEY_TO_DIR: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,       pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,   pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,   pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

TUTORIAL_LINES = [
    "Every step you take is recorded.",
    "Shadow clones replay your past moves and hunt you.",
    "Crimson clones walk your path one step at a time.",
    "Magenta wraiths can lurch ahead without warning.",
    "Pickups: SPEED quicker steps, CLOAK immunity, FREEZE stops clones.",
    "Survive as long as you can. Arrows / WASD to move.",
]


class Game:

    # ---- Core lifecycle wiring ----

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.cfg = CFG
        self.scene: Scene = Scene.MENU
        self.clock = pygame.time.Clock()
        self.w, self.h = self.screen.get_size()
        self.last_windowed_size = tuple(CFG["display"].get("windowed_size", WINDOWED_DEFAULT_SIZE))

        self.settings = make_runtime_settings(CFG)
        self.settings_idx = 0

        self._font_cache: dict[int, pygame.font.Font] = {}
        self.tile = TILE_SIZE
        self.origin = (0, HUD_HEIGHT)

        self.events = EventQueue()
        self.session = GameSession(
            difficulty=self.settings["difficulty"],
            objective=Objective(self.settings["objective"]),
            cols=self.settings["cols"],
            rows=self.settings["rows"],
            now_fn=self.now,
            events=self.events,
            on_run_end=self._record_run,
        )
        self.last_new_record = False

        self.music = MusicController(
            volume=self.settings["music_volume"], enabled=self.settings["music_enabled"]
        )
        self.sfx = SfxBank(
            PKG_DIR / "assets" / "sfx",
            volume=self.settings["sfx_volume"],
            enabled=self.settings["sfx_enabled"],
        )

    def now(self) -> float:
        return float(pygame.time.get_ticks())

    def start_game(self) -> None:
        self.session.difficulty = int(self.settings["difficulty"])
        self.session.objective = Objective(self.settings["objective"])
        self.session.cols = int(self.settings["cols"])
        self.session.rows = int(self.settings["rows"])
        self.session.new_run()
        self.events.pop_all()
        self.last_new_record = False
        self._recompute_layout()
        self.scene = Scene.GAME
        self.music.fade_to(CFG["audio"].get("music"))

    def back_to_menu(self) -> None:
        self.session.abandon()
        self.scene = Scene.MENU
        self.music.stop()

    def _record_run(self, state: RunState) -> bool:
        self.last_new_record = record_outcome(state.objective, state.outcome, state.score, state.difficulty)
        logger.debug("recorded %ds run (new record: %s)", state.score, self.last_new_record)
        return self.last_new_record

    # ---- Layout ----

    def _font(self, px: int) -> pygame.font.Font:
        f = self._font_cache.get(px)
        if f is None:
            f = pygame.font.Font(None, px)
            self._font_cache[px] = f
        return f

    def _recompute_layout(self) -> None:
        self.w, self.h = self.screen.get_size()
        st = self.session.state
        if st is None:
            return
        cols, rows = st.maze.width, st.maze.height
        self.tile = max(4, min(TILE_SIZE, self.w // cols, (self.h - HUD_HEIGHT) // rows))
        ox = (self.w - cols * self.tile) // 2
        oy = HUD_HEIGHT + (self.h - HUD_HEIGHT - rows * self.tile) // 2
        self.origin = (ox, oy)

    def _set_display_mode(self, fullscreen: bool) -> None:
        if fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(self.last_windowed_size, pygame.RESIZABLE)
        pygame.display.set_caption("Shadow Clone Escape")
        self._recompute_layout()

    def handle_resize(self, width: int, height: int) -> None:
        if self.settings.get("fullscreen"):
            return
        self.last_windowed_size = (width, height)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        persist_windowed_size(width, height)
        self._recompute_layout()

    # ---- Settings ----

    def settings_items(self) -> List[Tuple[str, str, Optional[str]]]:
        s = self.settings
        on_off = lambda v: "ON" if v else "OFF"
        return [
            ("Difficulty", ("EASY", "NORMAL", "HARD")[s["difficulty"]], "difficulty"),
            ("Objective", s["objective"], "objective"),
            ("Music", on_off(s["music_enabled"]), "music_enabled"),
            ("SFX", on_off(s["sfx_enabled"]), "sfx_enabled"),
            ("Music volume", f"{int(round(s['music_volume'] * 100))}%", "music_volume"),
            ("SFX volume", f"{int(round(s['sfx_volume'] * 100))}%", "sfx_volume"),
            ("Fullscreen", on_off(s["fullscreen"]), "fullscreen"),
            ("Maze columns", str(s["cols"]), "cols"),
            ("Maze rows", str(s["rows"]), "rows"),
            ("Best time", f"{best_time()}s  (ENTER resets)", "best_time"),
        ]

    def settings_adjust(self, delta: int) -> None:
        _, _, key = self.settings_items()[self.settings_idx]
        s = self.settings
        if key == "difficulty":
            s["difficulty"] += delta
        elif key == "objective":
            s["objective"] = cycle_objective(s["objective"], delta)
        elif key in ("music_enabled", "sfx_enabled", "fullscreen"):
            s[key] = not s[key]
        elif key in ("music_volume", "sfx_volume"):
            s[key] = round(s[key] + 0.05 * delta, 2)
        elif key in ("cols", "rows"):
            s[key] += 2 * delta
        clamp_settings(s)
        self.music.set_volume(s["music_volume"])
        self.sfx.set_volume(s["sfx_volume"])

    def open_settings(self) -> None:
        self.settings = make_runtime_settings(CFG)
        self.settings_idx = 0
        self.scene = Scene.SETTINGS

    def settings_save(self) -> None:
        was_fullscreen = bool(CFG["display"]["fullscreen"])
        save_config(commit_settings(self.settings, CFG=CFG))
        self.music.set_enabled(self.settings["music_enabled"])
        self.sfx.enabled = bool(self.settings["sfx_enabled"])
        if was_fullscreen != bool(self.settings["fullscreen"]):
            self._set_display_mode(bool(self.settings["fullscreen"]))
        self.scene = Scene.MENU

    # ---- Input ----

    def handle_event(self, event: pygame.event.Event, iq: InputQueue):
        if event.type == pygame.VIDEORESIZE:
            self.handle_resize(event.w, event.h)
            return

        if event.type == pygame.KEYUP and self.scene is Scene.GAME:
            d = KEY_TO_DIR.get(event.key)
            if d is not None:
                self.session.clear_intent(d)
            return

        if event.type != pygame.KEYDOWN:
            return

        if event.key in (pygame.K_ESCAPE, pygame.K_q) and self.scene is not Scene.SETTINGS:
            pygame.quit(); sys.exit(0)

        if self.scene is Scene.MENU:
            if event.key == pygame.K_RETURN:
                self.start_game()
            elif event.key == pygame.K_o:
                self.open_settings()
            elif event.key == pygame.K_t:
                self.scene = Scene.TUTORIAL

        elif self.scene is Scene.TUTORIAL:
            self.scene = Scene.MENU

        elif self.scene is Scene.GAME:
            d = KEY_TO_DIR.get(event.key)
            if d is not None:
                self.session.try_move(d)
                self.session.set_intent(d)
            elif event.key == pygame.K_m:
                self.back_to_menu()

        elif self.scene is Scene.OVER:
            if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self.start_game()
            elif event.key == pygame.K_m:
                self.scene = Scene.MENU

        elif self.scene is Scene.SETTINGS:
            items = self.settings_items()
            if event.key in (pygame.K_UP, pygame.K_w):
                self.settings_idx = (self.settings_idx - 1) % len(items)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self.settings_idx = (self.settings_idx + 1) % len(items)
            elif event.key in (pygame.K_LEFT, pygame.K_a):
                self.settings_adjust(-1)
            elif event.key in (pygame.K_RIGHT, pygame.K_d):
                self.settings_adjust(+1)
            elif event.key == pygame.K_RETURN:
                if items[self.settings_idx][2] == "best_time":
                    reset_records()
                    return
                self.settings_save()
            elif event.key in (pygame.K_ESCAPE, pygame.K_o):
                self.scene = Scene.MENU

    def update(self, iq: InputQueue) -> None:
        if self.scene is not Scene.GAME:
            if self.scene is Scene.MENU:
                for d, pressed in iq.pop_directions():
                    if pressed:
                        self.start_game()
                        break
            else:
                iq.pop_all()
            return

        for d, pressed in iq.pop_directions():
            if pressed:
                self.session.try_move(d)
                self.session.set_intent(d)
            else:
                self.session.clear_intent(d)

        self.session.tick()

        for ev in self.events.pop_all():
            self.sfx.play(ev)
            if ev == EV_RUN_ENDED:
                self.music.stop()

        if not self.session.running:
            self.scene = Scene.OVER

    # ---- Rendering ----

    def draw_text(self, text: str, pos: Tuple[float, float], *, size_px: int = 28,
                  color=INK, center: bool = False, shadow: bool = True) -> pygame.Rect:
        font = self._font(size_px)
        base = font.render(text, True, color)
        rect = base.get_rect()
        if center:
            rect.center = (int(pos[0]), int(pos[1]))
        else:
            rect.topleft = (int(pos[0]), int(pos[1]))
        if shadow:
            sh = font.render(text, True, (0, 0, 0))
            dx, dy = TEXT_SHADOW_OFFSET
            self.screen.blit(sh, rect.move(dx, dy))
        self.screen.blit(base, rect)
        return rect

    def _cell_rect(self, x: int, y: int, inset: int = 0) -> pygame.Rect:
        ox, oy = self.origin
        t = self.tile
        return pygame.Rect(ox + x * t + inset, oy + y * t + inset, t - 2 * inset, t - 2 * inset)

    def _draw_maze(self, st: RunState) -> None:
        for y, row in enumerate(st.maze.cells):
            for x, c in enumerate(row):
                col = WALL_COLOR if c is Cell.WALL else (GOAL_COLOR if c is Cell.GOAL else FLOOR_COLOR)
                pygame.draw.rect(self.screen, col, self._cell_rect(x, y))

    def _draw_pickups(self, st: RunState) -> None:
        for p in st.pickups:
            col = POWERUP_COLORS[p.kind.value]
            r = self._cell_rect(p.pos.x, p.pos.y)
            if p.kind.value == "speed":
                pygame.draw.circle(self.screen, col, r.center, max(2, int(self.tile * 0.28)))
            elif p.kind.value == "cloak":
                pygame.draw.rect(self.screen, col, r.inflate(-self.tile // 3, -self.tile // 3))
            else:
                cx, cy = r.center
                k = self.tile * 0.22
                pygame.draw.polygon(self.screen, col, [(cx, cy - k), (cx + k * 0.75, cy + k * 0.5), (cx - k * 0.75, cy + k * 0.5)])

    def _draw_clones(self, st: RunState) -> None:
        layer = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        for c in st.engine.clones:
            base = FROZEN_TINT if c.frozen else CLONE_COLORS[c.kind.value]
            pulse = 0.6 + math.sin(c.age(st.tick) / 12) * 0.2
            alpha = int(255 * max(0.35, min(1.0, pulse)))
            pygame.draw.rect(layer, (*base, alpha), self._cell_rect(c.position.x, c.position.y, inset=1))
        self.screen.blit(layer, (0, 0))

    def _draw_player(self, st: RunState) -> None:
        trail = st.recorder.recent(TRAIL_LENGTH)
        layer = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        for i, m in enumerate(trail):
            a = int(255 * (0.08 + (i / TRAIL_LENGTH) * 0.18))
            pygame.draw.rect(layer, (*TRAIL_COLOR, a), self._cell_rect(m.x, m.y, inset=self.tile // 4))
        self.screen.blit(layer, (0, 0))
        r = self._cell_rect(st.player.x, st.player.y)
        pygame.draw.circle(self.screen, PLAYER_COLOR, r.center, max(2, int(self.tile * 0.4)))

    def _draw_hud(self, st: RunState) -> None:
        now = self.now()
        pygame.draw.rect(self.screen, (18, 20, 26), pygame.Rect(0, 0, self.w, HUD_HEIGHT))
        self.draw_text(f"Time: {st.elapsed_seconds(now)}s", (16, 12))
        best = best_escape() if st.objective is Objective.GOAL else best_time()
        self.draw_text(f"Best: {best}s" if best else "Best: -", (180, 12), color=ACCENT)
        self.draw_text(f"Clones: {len(st.engine)}", (340, 12))
        eff = st.effect
        if eff is not None and eff.is_active(now):
            secs = int(math.ceil(eff.remaining_ms(now) / 1000))
            self.draw_text(f"{eff.kind.value.upper()} {secs}s", (self.w - 160, 12),
                           color=POWERUP_COLORS[eff.kind.value])

    def _draw_gameplay(self) -> None:
        st = self.session.state
        if st is None:
            return
        self._draw_maze(st)
        self._draw_pickups(st)
        self._draw_clones(st)
        self._draw_player(st)
        self._draw_hud(st)

    def _draw_over(self) -> None:
        st = self.session.state
        shade = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        self.screen.blit(shade, (0, 0))
        cx, cy = self.w // 2, self.h // 2
        if st is not None:
            head = "You escaped the maze!" if st.outcome is Outcome.ESCAPED else "Caught by your shadow!"
            self.draw_text(head, (cx, cy - 90), size_px=56, center=True)
            if st.objective is Objective.GOAL:
                line = f"Escaped in {st.score}s" if st.outcome is Outcome.ESCAPED else f"Lost after {st.score}s"
                best = best_escape()
            else:
                line = f"You survived {st.score}s"
                best = best_time()
            line += "  NEW RECORD!" if self.last_new_record else (f"  (Best: {best}s)" if best else "")
            self.draw_text(line, (cx, cy - 30), size_px=34, center=True, color=ACCENT)
        for i, row in enumerate(leaderboard()[:5]):
            diff = ("easy", "normal", "hard")[max(0, min(2, int(row.get("difficulty", 1))))]
            self.draw_text(f"{i + 1}. {row['time']}s  {diff}", (cx, cy + 20 + i * 26), size_px=24, center=True)
        self.draw_text("SPACE restart   M menu   ESC quit", (cx, self.h - 40), size_px=24, center=True)

    def _draw_menu(self) -> None:
        cx = self.w // 2
        self.draw_text("SHADOW CLONE ESCAPE", (cx, self.h * 0.3), size_px=72, center=True, color=CLONE_COLORS[CloneKind.BASIC.value])
        best = best_time()
        self.draw_text(f"Best: {best}s" if best else "Best: -", (cx, self.h * 0.3 + 60), center=True, color=ACCENT)
        for i, line in enumerate(("ENTER start", "T tutorial", "O settings", "ESC quit")):
            self.draw_text(line, (cx, self.h * 0.55 + i * 34), center=True)

    def _draw_tutorial(self) -> None:
        cx = self.w // 2
        for i, line in enumerate(TUTORIAL_LINES):
            self.draw_text(line, (cx, self.h * 0.25 + i * 40), size_px=30, center=True)
        self.draw_text("press any key", (cx, self.h - 60), size_px=24, center=True, color=ACCENT)

    def _draw_settings(self) -> None:
        self.draw_text("SETTINGS", (self.w // 2, 50), size_px=56, center=True)
        y = 110
        for i, (label, value, _) in enumerate(self.settings_items()):
            col = ACCENT if i == self.settings_idx else INK
            self.draw_text(label, (self.w * 0.2, y), color=col)
            self.draw_text(value, (self.w * 0.6, y), color=col)
            y += 38
        self.draw_text("ENTER save   O/ESC back   LEFT/RIGHT change", (self.w // 2, self.h - 40), size_px=24, center=True)

    def draw(self) -> None:
        self.screen.fill(BG)
        if self.scene is Scene.MENU:
            self._draw_menu()
        elif self.scene is Scene.TUTORIAL:
            self._draw_tutorial()
        elif self.scene is Scene.SETTINGS:
            self._draw_settings()
        elif self.scene is Scene.GAME:
            self._draw_gameplay()
        elif self.scene is Scene.OVER:
            self._draw_gameplay()
            self._draw_over()
        pygame.display.flip()


__all__ = ["Game"]
