"""
Pygame renderer
"""

from __future__ import annotations

import math

import pygame

from space_invaders_sim.constants import (
    BACKGROUND_COLOR,
    ENEMY_BULLET_COLOR,
    PLAYER_BULLET_COLOR,
    PLAYER_COLOR,
    TEXT_COLOR,
)
from space_invaders_sim.entities import PowerUpKind
from space_invaders_sim.scenes.invaders import FrameSnapshot, HudSnapshot
from space_invaders_sim.state import GameState
from space_invaders_sim.utils import logger

POWER_UP_COLORS = {
    PowerUpKind.RAPID_FIRE: (255, 255, 0),
    PowerUpKind.MULTI_SHOT: (0, 255, 255),
    PowerUpKind.SHIELD: (0, 255, 0),
}


class Drawable:
    """
    Something drawn onto the frame
    """

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        """
        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")


class DrawStars(Drawable):
    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        width, height = surface.get_size()
        offset = pygame.time.get_ticks() * 0.01
        for i in range(50):
            x = (i * 37) % width
            y = int(i * 53 + offset) % height
            surface.fill(TEXT_COLOR, (x, y, 1, 1))


class DrawPlayer(Drawable):
    """
    Drawable Player
    """

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        p = snapshot.player
        half_w, half_h = p.width / 2, p.height / 2

        if p.shield:
            radius = int(half_w + 10 + math.sin(p.shield_animation) * 5)
            pygame.draw.circle(surface, PLAYER_COLOR, (int(p.x), int(p.y)), radius, 3)

        pygame.draw.polygon(
            surface,
            PLAYER_COLOR,
            [
                (p.x, p.y - half_h),
                (p.x - half_w, p.y + half_h),
                (p.x + half_w, p.y + half_h),
            ],
        )
        surface.fill(TEXT_COLOR, (int(p.x) - 5, int(p.y) - 5, 10, 10))


class DrawEnemies(Drawable):
    """
    Drawable Enemies
    """

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        for e in snapshot.enemies:
            if not e.active:
                continue

            w, h = e.width, e.height
            pygame.draw.polygon(
                surface,
                e.color,
                [
                    (e.x, e.y - h / 2),
                    (e.x - w / 4, e.y - h / 4),
                    (e.x - w / 2, e.y),
                    (e.x - w / 4, e.y + h / 4),
                    (e.x, e.y + h / 2),
                    (e.x + w / 4, e.y + h / 4),
                    (e.x + w / 2, e.y),
                    (e.x + w / 4, e.y - h / 4),
                ],
            )
            # eyes
            eye = (int(w / 8), int(h / 8))
            surface.fill(BACKGROUND_COLOR, (int(e.x - w / 6), int(e.y - h / 6), *eye))
            surface.fill(BACKGROUND_COLOR, (int(e.x + w / 12), int(e.y - h / 6), *eye))


class DrawBullets(Drawable):
    """
    Drawable Bullets
    """

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        for b in snapshot.player_bullets + snapshot.enemy_bullets:
            if not b.active:
                continue
            box = b.bounding_box()
            color = PLAYER_BULLET_COLOR if b.owner == "player" else ENEMY_BULLET_COLOR
            surface.fill(color, (int(box.x), int(box.y), int(box.width), int(box.height)))


class DrawPowerUps(Drawable):
    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        for p in snapshot.power_ups:
            if not p.active:
                continue
            box = p.bounding_box()
            pygame.draw.rect(
                surface,
                POWER_UP_COLORS[p.kind],
                (int(box.x), int(box.y), int(box.width), int(box.height)),
                2,
            )


class DrawText(Drawable):
    """
    Drawable line of text, centered horizontally at a height fraction
    """

    def __init__(self, font: pygame.font.Font, text: str, y_ratio: float, color=TEXT_COLOR):
        self.font = font
        self.text = text
        self.y_ratio = y_ratio
        self.color = color

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        width, height = surface.get_size()
        image = self.font.render(self.text, True, self.color)
        rect = image.get_rect(center=(width // 2, int(height * self.y_ratio)))
        surface.blit(image, rect)


class DrawHud(Drawable):
    def __init__(self, font: pygame.font.Font, hud: HudSnapshot):
        self.font = font
        self.hud = hud

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot):
        hud = self.hud
        width, _ = surface.get_size()
        left = self.font.render(f"SCORE {hud.score}  HI {hud.high_score}", True, TEXT_COLOR)
        right = self.font.render(f"LIVES {hud.lives}  LEVEL {hud.level}", True, TEXT_COLOR)
        surface.blit(left, (10, 10))
        surface.blit(right, (width - right.get_width() - 10, 10))


class PygameRenderer:
    """
    Draws snapshots onto a pygame surface. HUD, game over and menu text
    come from the presenter calls, the snapshot only fills in before the
    first call.
    """

    def __init__(self, surface: pygame.Surface, flip: bool = True):
        """
        :param surface: Surface to draw on, usually the display
        :type surface: pygame.Surface

        :param flip: Whether to flip the display after each frame
        :type flip: bool
        """
        if not pygame.font.get_init():
            pygame.font.init()

        self.surface = surface
        self.flip = flip
        self.font = pygame.font.Font(None, 24)
        self.title_font = pygame.font.Font(None, 64)
        self.hud: HudSnapshot | None = None
        self.game_over_lines: list[str] | None = None
        self.menu_high_score: int | None = None

    # Presenter

    def update_hud(self, hud: HudSnapshot) -> None:
        self.hud = hud

    def show_game_over(self, final_score: int, is_new_high_score: bool) -> None:
        self.game_over_lines = [f"FINAL SCORE {final_score}"]
        if is_new_high_score:
            self.game_over_lines.append("NEW HIGH SCORE!")
        logger.debug(f"Game over screen, final score {final_score}")

    def show_menu(self, high_score: int) -> None:
        self.menu_high_score = high_score
        logger.debug(f"Menu screen, high score {high_score}")

    # Renderer

    def drawables(self, snapshot: FrameSnapshot) -> list[Drawable]:
        if snapshot.state is GameState.MENU:
            high_score = self.menu_high_score
            if high_score is None:
                high_score = snapshot.hud.high_score
            return [
                DrawStars(),
                DrawText(self.title_font, "SPACE INVADERS", 0.35),
                DrawText(self.font, f"HIGH SCORE {high_score}", 0.5),
                DrawText(self.font, "PRESS ENTER TO START", 0.6),
            ]

        ops: list[Drawable] = [
            DrawStars(),
            DrawPowerUps(),
            DrawEnemies(),
            DrawBullets(),
            DrawPlayer(),
            DrawHud(self.font, self.hud or snapshot.hud),
        ]
        if snapshot.state is GameState.GAME_OVER:
            lines = self.game_over_lines or [f"FINAL SCORE {snapshot.hud.score}"]
            ops.append(DrawText(self.title_font, "GAME OVER", 0.4))
            ops.append(DrawText(self.font, lines[0], 0.5))
            for line in lines[1:]:
                ops.append(DrawText(self.font, line, 0.55, PLAYER_COLOR))
            ops.append(DrawText(self.font, "ENTER TO RESTART, M FOR MENU", 0.62))
        return ops

    def render(self, snapshot: FrameSnapshot) -> None:
        self.surface.fill(BACKGROUND_COLOR)
        for drawable in self.drawables(snapshot):
            drawable.draw(self.surface, snapshot)

        if self.flip:
            pygame.display.flip()
