"""
Space Invaders entities
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from space_invaders_sim.collision import BoxBody
from space_invaders_sim.constants import (
    BULLET_SIZE,
    MULTI_SHOT_OFFSET,
    PLAYER_BASE_COOLDOWN,
    PLAYER_BULLET_SPEED,
    PLAYER_LIVES,
    PLAYER_SIZE,
    PLAYER_SPEED,
    POWER_UP_DURATION,
    POWER_UP_SIZE,
    POWER_UP_SPEED,
)

BulletOwner = Literal["player", "enemy"]


@dataclass(frozen=True)
class InputState:
    """
    Directional and fire input for one frame
    """

    left: bool = False
    right: bool = False
    fire: bool = False


@dataclass
class Projectile(BoxBody):
    """
    Bullet entity. Player bullets travel up, enemy bullets travel down.
    """

    x: float
    y: float
    speed: float
    owner: BulletOwner = "player"
    width: float = BULLET_SIZE[0]
    height: float = BULLET_SIZE[1]
    active: bool = True

    @property
    def direction(self) -> int:
        return -1 if self.owner == "player" else 1

    def advance(self) -> None:
        self.y += self.direction * self.speed

    def is_off_screen(self, bound: float) -> bool:
        """
        :param bound: Height of the playfield
        :type bound: float

        :return: bool
        """
        return self.y < 0 or self.y > bound


@dataclass(frozen=True)
class EnemyTier:
    """Row dependent look and value of an enemy."""

    size: tuple[int, int]
    points: int
    speed: float
    color: tuple[int, int, int]


TOP_TIER = EnemyTier(size=(30, 30), points=30, speed=1.0, color=(255, 255, 0))
MIDDLE_TIER = EnemyTier(size=(35, 35), points=20, speed=0.8, color=(0, 255, 255))
BOTTOM_TIER = EnemyTier(size=(40, 40), points=10, speed=0.6, color=(255, 0, 0))


def tier_for_row(row: int) -> EnemyTier:
    """
    Map a formation row to its tier

    :param row: Row index, 0 is the top row
    :type row: int

    :return: EnemyTier
    """
    if row == 0:
        return TOP_TIER
    if row <= 2:
        return MIDDLE_TIER
    return BOTTOM_TIER


@dataclass
class Enemy(BoxBody):
    """
    Enemy entity
    """

    start_x: float
    start_y: float
    row: int = 0
    col: int = 0
    can_shoot: bool = False
    active: bool = True
    animation_frame: float = 0.0  # cosmetic only
    x: float = field(init=False)
    y: float = field(init=False)
    tier: EnemyTier = field(init=False)

    def __post_init__(self):
        self.x = self.start_x
        self.y = self.start_y
        self.tier = tier_for_row(self.row)

    @property
    def width(self) -> float:
        return self.tier.size[0]

    @property
    def height(self) -> float:
        return self.tier.size[1]

    @property
    def points(self) -> int:
        return self.tier.points

    @property
    def speed(self) -> float:
        return self.tier.speed

    @property
    def color(self) -> tuple[int, int, int]:
        return self.tier.color

    def advance(self, direction: float, vertical_drop: float) -> None:
        """
        Move the enemy. Boundaries are the formation's business.

        :param direction: Signed group speed, multiplied by the tier speed
        :type direction: float

        :param vertical_drop: Units to move down this frame
        :type vertical_drop: float
        """
        if not self.active:
            return

        self.x += direction * self.speed
        self.y += vertical_drop
        self.animation_frame += 0.1

    def shoot(self, bullet_speed: float) -> Projectile | None:
        """
        Fire a bullet from the lower edge

        :param bullet_speed: Speed of the bullet
        :type bullet_speed: float

        :return: Projectile | None
        """
        if not self.active or not self.can_shoot:
            return None

        return Projectile(
            self.x, self.y + self.height / 2, bullet_speed, owner="enemy"
        )

    def reset(self) -> None:
        self.x = self.start_x
        self.y = self.start_y
        self.active = True


class PowerUpKind(str, Enum):
    RAPID_FIRE = "rapid_fire"
    MULTI_SHOT = "multi_shot"
    SHIELD = "shield"


POWER_UP_KINDS = list(PowerUpKind)


@dataclass
class PowerUp(BoxBody):
    """
    Power-up entity, falls from where an enemy was destroyed
    """

    x: float
    y: float
    kind: PowerUpKind
    width: float = POWER_UP_SIZE[0]
    height: float = POWER_UP_SIZE[1]
    speed: float = POWER_UP_SPEED
    active: bool = True
    animation_frame: float = 0.0

    @classmethod
    def spawn(cls, x: float, y: float, rng: random.Random) -> PowerUp:
        """
        Create a power-up with a kind drawn uniformly at random

        :param x: Center x
        :type x: float

        :param y: Center y
        :type y: float

        :param rng: Random source
        :type rng: random.Random

        :return: PowerUp
        """
        return cls(x, y, kind=rng.choice(POWER_UP_KINDS))

    def advance(self) -> None:
        self.y += self.speed
        self.animation_frame += 0.1

    def is_off_screen(self, screen_height: float) -> bool:
        return self.y > screen_height + self.height


# pylint: disable=too-many-instance-attributes
@dataclass
class Player(BoxBody):
    """
    Player ship entity
    """

    start_x: float
    start_y: float
    canvas_width: float
    width: float = PLAYER_SIZE[0]
    height: float = PLAYER_SIZE[1]
    speed: float = PLAYER_SPEED
    max_lives: int = PLAYER_LIVES
    base_cooldown: int = PLAYER_BASE_COOLDOWN
    bullet_speed: float = PLAYER_BULLET_SPEED
    power_up_duration: int = POWER_UP_DURATION
    multi_shot_offset: float = MULTI_SHOT_OFFSET

    x: float = field(init=False)
    y: float = field(init=False)
    lives: int = field(init=False)
    bullets: list[Projectile] = field(init=False)
    shoot_cooldown: int = field(init=False)
    shoot_cooldown_time: int = field(init=False)

    rapid_fire: bool = field(init=False)
    rapid_fire_timer: int = field(init=False)
    multi_shot: bool = field(init=False)
    multi_shot_timer: int = field(init=False)
    shield: bool = field(init=False)
    shield_timer: int = field(init=False)
    shield_animation: float = field(init=False)

    def __post_init__(self):
        self.reset()

    @property
    def rapid_fire_cooldown(self) -> int:
        return self.base_cooldown // 3

    def reset(self) -> None:
        """
        Restore defaults for a fresh run
        """
        self.x = self.start_x
        self.y = self.start_y
        self.lives = self.max_lives
        self.bullets = []
        self.shoot_cooldown = 0
        self.shoot_cooldown_time = self.base_cooldown

        self.rapid_fire = False
        self.rapid_fire_timer = 0
        self.multi_shot = False
        self.multi_shot_timer = 0
        self.shield = False
        self.shield_timer = 0
        self.shield_animation = 0.0

    def recenter(self) -> None:
        self.x = self.canvas_width / 2

    def advance(self, input_state: InputState) -> None:
        """
        Move, fire, fly owned bullets and decay power-ups

        :param input_state: Input for this frame
        :type input_state: InputState
        """
        if input_state.left:
            self.x -= self.speed
        if input_state.right:
            self.x += self.speed

        half = self.width / 2
        self.x = max(half, min(self.canvas_width - half, self.x))

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

        if input_state.fire and self.shoot_cooldown == 0:
            self.shoot()
            self.shoot_cooldown = self.shoot_cooldown_time

        for bullet in self.bullets:
            bullet.advance()
        self.bullets = [b for b in self.bullets if b.active]

        self._update_power_ups()

    def shoot(self) -> None:
        """
        Shoot one bullet, or three side by side under multi-shot
        """
        offsets = (0, -self.multi_shot_offset, self.multi_shot_offset)
        if not self.multi_shot:
            offsets = (0,)

        for offset in offsets:
            self.bullets.append(
                Projectile(self.x + offset, self.y, self.bullet_speed, owner="player")
            )

    def _update_power_ups(self) -> None:
        if self.rapid_fire:
            self.rapid_fire_timer -= 1
            if self.rapid_fire_timer <= 0:
                self.rapid_fire = False
                self.rapid_fire_timer = 0
                self.shoot_cooldown_time = self.base_cooldown

        if self.multi_shot:
            self.multi_shot_timer -= 1
            if self.multi_shot_timer <= 0:
                self.multi_shot = False
                self.multi_shot_timer = 0

        if self.shield:
            self.shield_timer -= 1
            self.shield_animation += 0.2
            if self.shield_timer <= 0:
                self.shield = False
                self.shield_timer = 0

    def activate_power_up(self, kind: PowerUpKind) -> None:
        """
        Turn a power-up on, or refresh its timer if it is already on

        :param kind: Kind of power-up collected
        :type kind: PowerUpKind
        """
        kind = PowerUpKind(kind)
        if kind is PowerUpKind.RAPID_FIRE:
            self.rapid_fire = True
            self.rapid_fire_timer = self.power_up_duration
            self.shoot_cooldown_time = self.rapid_fire_cooldown
        elif kind is PowerUpKind.MULTI_SHOT:
            self.multi_shot = True
            self.multi_shot_timer = self.power_up_duration
        elif kind is PowerUpKind.SHIELD:
            self.shield = True
            self.shield_timer = self.power_up_duration

    def take_damage(self) -> bool:
        """
        Absorb a hit with the shield or lose a life

        :return: True when a life was actually lost
        :rtype: bool
        """
        if self.shield:
            self.shield = False
            self.shield_timer = 0
            return False

        self.lives = max(0, self.lives - 1)
        return True
