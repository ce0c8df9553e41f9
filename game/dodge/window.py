"""
Arcade window: draws the engine state, forwards pointer input, runs the menus.

The window never changes simulation state directly. It calls
DodgeEngine.advance() once per frame, start() when a run begins, and
set_target()/stop_moving() from pointer events translated through the
letterbox transform.
"""

from __future__ import annotations

from typing import Optional

import arcade

from .engine import DodgeEngine, FrameResult
from .hud import AppState, HudState
from .leaderboard import Leaderboard
from .utils import hex_to_rgb
from .viewport import Letterbox


class DodgeWindow(arcade.Window):
    """Arcade window for playing (or watching) a DodgeEngine"""

    def __init__(
        self,
        engine: DodgeEngine,
        width: int = 800,
        height: int = 600,
        leaderboard: Optional[Leaderboard] = None,
        drives_engine: bool = True,
        title: str = "Dodge",
    ):
        super().__init__(width, height, title, resizable=True)
        self.engine = engine
        self.drives_engine = drives_engine
        self.hud = HudState(leaderboard, follows_engine=not drives_engine)
        self.letterbox = Letterbox.fit(width, height, engine.width, engine.height)

        # Colors
        self.LETTERBOX_C = (255, 255, 255)
        self.ARENA_C = (5, 5, 5)
        self.BORDER_C = (68, 68, 68)
        self.ENEMY_C = (255, 51, 51)
        self.HUD_C = (220, 220, 220)
        self.TITLE_C = (34, 211, 238)
        self.SCORE_C = (253, 224, 71)

    # ----------------------------
    # Frame loop
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.drives_engine:
            return
        self.handle_result(self.engine.advance())

    def handle_result(self, result: FrameResult):
        self.hud.handle_result(result)

    def start_run(self):
        self.engine.start()
        self.hud.begin_run()

    # ----------------------------
    # Input
    # ----------------------------

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        self.letterbox = Letterbox.fit(width, height, self.engine.width, self.engine.height)

    def _steer(self, x: float, y: float):
        if self.hud.app_state is not AppState.PLAYING or not self.drives_engine:
            return
        ax, ay = self.letterbox.to_arena(x, y)
        self.engine.set_target(ax, ay)

    def on_mouse_press(self, x, y, button, modifiers):
        if self.hud.app_state in (AppState.MENU, AppState.GAME_OVER) and self.drives_engine:
            self.start_run()
            return
        self._steer(x, y)

    def on_mouse_motion(self, x, y, dx, dy):
        self._steer(x, y)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        self._steer(x, y)

    def on_mouse_release(self, x, y, button, modifiers):
        if self.hud.app_state is AppState.PLAYING and self.drives_engine:
            self.engine.stop_moving()

    def on_key_press(self, symbol, modifiers):
        if not self.drives_engine:
            return

        state = self.hud.app_state
        if symbol in (arcade.key.SPACE, arcade.key.ENTER):
            if state in (AppState.MENU, AppState.GAME_OVER):
                self.start_run()
        elif symbol == arcade.key.L:
            if state in (AppState.MENU, AppState.GAME_OVER):
                self.hud.show_ranking()
        elif symbol == arcade.key.ESCAPE:
            if state is AppState.MENU:
                self.close()
            else:
                self.hud.app_state = AppState.MENU

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        lb = self.letterbox

        left, right, bottom, top = lb.arena_rect()
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.LETTERBOX_C)
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, self.ARENA_C)

        self._draw_world()

        # Cover particles that spilled out of the arena
        for rect in lb.bars():
            arcade.draw_lrbt_rectangle_filled(*rect, self.LETTERBOX_C)
        arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, self.BORDER_C, 4)

        self._draw_hud()

    def _draw_world(self):
        lb = self.letterbox
        engine = self.engine
        s = lb.scale

        # Player with a soft glow
        p = engine.player
        px, py = lb.to_screen(p.x, p.y)
        player_c = hex_to_rgb(p.color)
        arcade.draw_circle_filled(px, py, (p.radius + 8) * s, (*player_c, 60))
        arcade.draw_circle_filled(px, py, p.radius * s, player_c)

        for e in engine.enemies:
            ex, ey = lb.to_screen(e.x, e.y)
            arcade.draw_circle_filled(ex, ey, e.radius * s, self.ENEMY_C)

        for q in engine.particles:
            qx, qy = lb.to_screen(q.x, q.y)
            alpha = int(255 * max(0.0, min(1.0, q.life)))
            arcade.draw_circle_filled(qx, qy, 4 * s, (*hex_to_rgb(q.color), alpha))

    def _draw_hud(self):
        hud = self.hud
        left, right, bottom, top = self.letterbox.arena_rect()
        cx = (left + right) / 2
        cy = (bottom + top) / 2

        if hud.app_state is AppState.PLAYING:
            txt = f"TIME {hud.elapsed:6.2f}s   DODGED {hud.dodges}"
            arcade.draw_text(txt, left + 12, top - 28, self.HUD_C, 14)

        elif hud.app_state is AppState.MENU:
            arcade.draw_text("DODGE", cx, cy + 40, self.TITLE_C, 48, anchor_x="center")
            arcade.draw_text("Click or press SPACE to play   L: ranking   ESC: quit",
                             cx, cy - 20, self.HUD_C, 14, anchor_x="center")

        elif hud.app_state is AppState.GAME_OVER:
            arcade.draw_text("GAME OVER", cx, cy + 40, self.ENEMY_C, 40, anchor_x="center")
            if hud.final_time is not None:
                arcade.draw_text(f"{hud.final_time:.2f}s   dodged {hud.final_dodges}",
                                 cx, cy - 5, self.SCORE_C, 20, anchor_x="center")
            arcade.draw_text("SPACE: retry   L: ranking   ESC: menu",
                             cx, cy - 45, self.HUD_C, 14, anchor_x="center")

        elif hud.app_state is AppState.RANKING:
            arcade.draw_text("RANKING", cx, top - 60, self.TITLE_C, 32, anchor_x="center")
            y = top - 100
            if not hud.ranking and hud.status_message is None:
                arcade.draw_text("No records yet.", cx, y, self.HUD_C, 14, anchor_x="center")
            for entry in hud.ranking:
                arcade.draw_text(entry.format_row(), cx, y, self.HUD_C, 14,
                                 anchor_x="center", font_name="Courier New")
                y -= 24
            arcade.draw_text("ESC: back", cx, bottom + 20, self.HUD_C, 12, anchor_x="center")

        if hud.status_message and hud.app_state is not AppState.PLAYING:
            arcade.draw_text(hud.status_message, cx, bottom + 44, self.SCORE_C, 12,
                             anchor_x="center")


def run_window(engine: DodgeEngine, leaderboard: Optional[Leaderboard] = None,
               width: int = 800, height: int = 600):
    """Open a window and run the interactive game until it is closed"""
    window = DodgeWindow(engine, width, height, leaderboard=leaderboard)
    arcade.run()
    return window
