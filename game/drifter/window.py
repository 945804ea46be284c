"""
Arcade front end: draws a Simulation and feeds it mouse/keyboard input

The simulation works in screen space (y grows downward); arcade's y axis
points up, so every coordinate is flipped on the way in and out.
"""

from __future__ import annotations

import time
from typing import Optional

import arcade

from .simulation import Simulation
from .states import GameState
from .utils import clamp

TITLE = "Stardust Drifter"

# One color per planet visual variant
PLANET_COLORS = [
    (214, 120, 78),
    (96, 160, 220),
    (150, 110, 200),
    (110, 190, 130),
]


class DrifterWindow(arcade.Window):
    """Arcade window rendering (and optionally driving) a Simulation"""

    def __init__(self, sim: Simulation, width: int, height: int, interactive: bool = True):
        super().__init__(width, height, TITLE, resizable=interactive)
        self.sim = sim
        self.interactive = interactive

        # Colors
        self.BG = (0, 0, 17)
        self.PLAYER_C = (240, 240, 255)
        self.COMET_C = (255, 120, 40)
        self.STAR_C = (255, 215, 0)
        self.BG_STAR_C = (255, 255, 255)
        self.HUD_C = (220, 220, 220)
        self.DRAG_C = (255, 255, 255, 128)

    def attach(self, sim: Simulation):
        self.sim = sim

    def _y(self, y: float) -> float:
        return self.height - y

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        arcade.set_background_color(self.BG)
        state = self.sim.state

        if state == GameState.START:
            self._draw_screen(TITLE, "Click and drag to launch your ship", "Press any key to start")
        elif state == GameState.LEVEL_TRANSITION:
            self._draw_screen(f"Level {self.sim.level}",
                              f"Cumulative Score: {self.sim.score}",
                              "Prepare for the next level...")
        else:
            self._draw_world()
            if state == GameState.GAME_OVER:
                self._draw_screen("Game Over", f"Final Score: {self.sim.score}", "Press R to restart")

    def _draw_world(self):
        sim = self.sim
        for s in sim.background_stars:
            arcade.draw_circle_filled(s.x, self._y(s.y), s.radius, self.BG_STAR_C)

        for p in sim.planets:
            color = PLANET_COLORS[p.variant % len(PLANET_COLORS)]
            arcade.draw_circle_filled(p.x, self._y(p.y), p.radius, color)

        for c in sim.comets:
            arcade.draw_circle_filled(c.x, self._y(c.y), c.radius, self.COMET_C)

        for s in sim.collectable_stars:
            arcade.draw_circle_filled(s.x, self._y(s.y), s.radius, self.STAR_C)

        pl = sim.player
        arcade.draw_circle_filled(pl.x, self._y(pl.y), pl.radius, self.PLAYER_C)

        line = sim.drag_line
        if line is not None:
            (x0, y0), (x1, y1) = line
            arcade.draw_line(x0, self._y(y0), x1, self._y(y1), self.DRAG_C, 2 * sim.scale)

        # HUD - progress towards the next level
        bar_w, bar_h = 180, 10
        x0, y0 = 12, self.height - 22
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * clamp(sim.score / sim.required_score, 0, 1)
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, self.STAR_C)

        txt = f"Score: {sim.score}  Level: {sim.level}"
        arcade.draw_text(txt, 12, self.height - 40, self.HUD_C, 14)

    def _draw_screen(self, title: str, subtitle1: str = "", subtitle2: str = ""):
        cx, cy = self.width / 2, self.height / 2
        scale = self.sim.scale
        arcade.draw_text(title, cx, cy + 30 * scale, self.HUD_C, 40 * scale, anchor_x="center")
        if subtitle1:
            arcade.draw_text(subtitle1, cx, cy - 20 * scale, self.HUD_C, 20 * scale, anchor_x="center")
        if subtitle2:
            arcade.draw_text(subtitle2, cx, cy - 60 * scale, self.HUD_C, 20 * scale, anchor_x="center")

    # ----------------------------
    # Frame driver and input
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.interactive and self.sim.running:
            self.sim.frame(time.monotonic())

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if self.interactive:
            self.sim.pointer_down(x, self._y(y))

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        if self.interactive:
            self.sim.pointer_up(x, self._y(y))

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol == arcade.key.ESCAPE:
            self.close()
        elif self.sim.state == GameState.GAME_OVER:
            if symbol in (arcade.key.R, arcade.key.ENTER):
                self.sim.reset()
        else:
            self.sim.key_down()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        if self.interactive and width > 0 and height > 0:
            self.sim.resize(width, height)


def run_game(width: int = 1280, height: int = 720, seed: Optional[int] = None):
    """Open a window and play"""
    sim = Simulation(width, height, seed=seed)
    DrifterWindow(sim, width, height)
    arcade.run()
