"""
Enemy formation
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from space_invaders_sim.collision import HasBoundingBox
from space_invaders_sim.constants import (
    BASELINE_MARGIN,
    DROP_DISTANCE,
    EDGE_MARGIN,
    ENEMY_BASE_COOLDOWN,
    ENEMY_BULLET_BASE_SPEED,
    ENEMY_BULLET_SPEED_PER_LEVEL,
    ENEMY_COOLDOWN_STEP,
    ENEMY_MIN_COOLDOWN,
    FORMATION_COLS,
    FORMATION_ROWS,
    FORMATION_SPACING,
    FORMATION_SPEED_STEP,
    FORMATION_START_Y,
)
from space_invaders_sim.entities import Enemy, Projectile
from space_invaders_sim.utils import logger


def group_speed(level: int) -> float:
    return 1 + (level - 1) * FORMATION_SPEED_STEP


def shoot_cooldown_for(level: int) -> int:
    return max(ENEMY_MIN_COOLDOWN, ENEMY_BASE_COOLDOWN - (level - 1) * ENEMY_COOLDOWN_STEP)


def enemy_bullet_speed(level: int) -> float:
    return ENEMY_BULLET_BASE_SPEED + level * ENEMY_BULLET_SPEED_PER_LEVEL


# pylint: disable=too-many-instance-attributes
@dataclass
class Formation:
    """
    Move and fire the enemies as one group:
    - Move horizontally
    - If the group touches the wall it travels towards -> reverse and drop once
    - Every cooldown, one random bottom row enemy fires
    """

    canvas_width: float
    canvas_height: float
    rng: random.Random = field(default_factory=random.Random)
    rows: int = FORMATION_ROWS
    cols: int = FORMATION_COLS
    spacing: tuple[float, float] = FORMATION_SPACING
    start_y: float = FORMATION_START_Y
    edge_margin: float = EDGE_MARGIN
    drop_distance: float = DROP_DISTANCE
    baseline_margin: float = BASELINE_MARGIN

    enemies: list[Enemy] = field(default_factory=list)
    enemy_bullets: list[Projectile] = field(default_factory=list)
    direction: int = 1  # 1 for right, -1 for left
    move_down: bool = False
    move_down_distance: float = 0.0
    speed: float = 1.0
    shoot_cooldown: int = 0
    shoot_cooldown_time: int = ENEMY_BASE_COOLDOWN

    def __post_init__(self):
        if not self.enemies:
            self._create_formation()

    def _create_formation(self) -> None:
        spacing_x, spacing_y = self.spacing
        start_x = (self.canvas_width - (self.cols - 1) * spacing_x) / 2

        for row in range(self.rows):
            for col in range(self.cols):
                self.enemies.append(
                    Enemy(
                        start_x=start_x + col * spacing_x,
                        start_y=self.start_y + row * spacing_y,
                        row=row,
                        col=col,
                        can_shoot=row == self.rows - 1,
                    )
                )

        logger.debug(f"Formation created with {len(self.enemies)} enemies")

    def active_enemies(self) -> list[Enemy]:
        return [e for e in self.enemies if e.active]

    def all_destroyed(self) -> bool:
        return not any(e.active for e in self.enemies)

    def tick(self, level: int) -> None:
        """
        Advance the formation one frame

        :param level: Current level, scales speed and fire rate
        :type level: int
        """
        self.speed = group_speed(level)
        self.shoot_cooldown_time = shoot_cooldown_for(level)

        active = self.active_enemies()
        if not active:
            return

        leftmost = min(e.x - e.width / 2 for e in active)
        rightmost = max(e.x + e.width / 2 for e in active)

        hit_right = rightmost >= self.canvas_width - self.edge_margin
        hit_left = leftmost <= self.edge_margin
        # only the wall we are moving towards counts
        toward_wall = (hit_right and self.direction > 0) or (
            hit_left and self.direction < 0
        )
        if toward_wall and not self.move_down:
            self.direction *= -1
            self.move_down = True
            self.move_down_distance = self.drop_distance

        drop = self.move_down_distance if self.move_down else 0.0
        self.move_down = False
        self.move_down_distance = 0.0

        for enemy in active:
            enemy.advance(self.direction * self.speed, drop)

        self._fire(active, level)

        for bullet in self.enemy_bullets:
            bullet.advance()
        self.enemy_bullets = [
            b
            for b in self.enemy_bullets
            if b.active and not b.is_off_screen(self.canvas_height)
        ]

    def _fire(self, active: list[Enemy], level: int) -> None:
        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1
            return

        shooters = [e for e in active if e.can_shoot]
        if not shooters:
            return

        shooter = self.rng.choice(shooters)
        bullet = shooter.shoot(enemy_bullet_speed(level))
        if bullet is not None:
            self.enemy_bullets.append(bullet)
        self.shoot_cooldown = self.shoot_cooldown_time

    def resolve_hit(self, projectile: HasBoundingBox) -> Enemy | None:
        """
        Destroy the first active enemy, in row-major order, hit by a projectile

        :param projectile: Player projectile
        :type projectile: HasBoundingBox

        :return: The destroyed enemy, or None
        """
        for enemy in self.enemies:
            if enemy.active and enemy.collides_with(projectile):
                enemy.active = False
                return enemy
        return None

    def hit_player(self, player: HasBoundingBox) -> bool:
        """
        Consume the first enemy bullet touching the player

        :return: True if a bullet hit
        :rtype: bool
        """
        for bullet in self.enemy_bullets:
            if bullet.active and bullet.collides_with(player):
                bullet.active = False
                return True
        return False

    def reached_baseline(self, screen_height: float | None = None) -> bool:
        if screen_height is None:
            screen_height = self.canvas_height

        baseline = screen_height - self.baseline_margin
        return any(e.y + e.height / 2 >= baseline for e in self.active_enemies())

    def overruns(self, player: HasBoundingBox) -> bool:
        return any(e.collides_with(player) for e in self.active_enemies())

    def reset(self, level: int = 1) -> None:
        """
        Bring every enemy back for a new level

        :param level: Level being started
        :type level: int
        """
        for enemy in self.enemies:
            enemy.reset()

        self.enemy_bullets = []
        self.direction = 1
        self.move_down = False
        self.move_down_distance = 0.0
        self.shoot_cooldown = 0
        self.speed = group_speed(level)
        self.shoot_cooldown_time = shoot_cooldown_for(level)
