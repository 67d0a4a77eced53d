"""
Simulation settings
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from space_invaders_sim.constants import (
    FORMATION_COLS,
    FORMATION_ROWS,
    FPS,
    PLAYER_BASE_COOLDOWN,
    PLAYER_LIVES,
    PLAYER_SPEED,
    POWER_UP_DROP_CAP,
    POWER_UP_DROP_CHANCE,
    POWER_UP_DROP_STEP,
    POWER_UP_DURATION,
    WINDOW_SIZE,
    WINDOW_TITLE,
)
from space_invaders_sim.errors import ConfigError
from space_invaders_sim.utils import logger


@dataclass(frozen=True)
class WindowSettings:
    width: int = WINDOW_SIZE[0]
    height: int = WINDOW_SIZE[1]
    title: str = WINDOW_TITLE
    fps: int = FPS


@dataclass(frozen=True)
class GameplaySettings:
    lives: int = PLAYER_LIVES
    player_speed: float = PLAYER_SPEED
    shoot_cooldown: int = PLAYER_BASE_COOLDOWN
    power_up_duration: int = POWER_UP_DURATION
    drop_chance: float = POWER_UP_DROP_CHANCE
    drop_chance_step: float = POWER_UP_DROP_STEP
    drop_chance_cap: float = POWER_UP_DROP_CAP
    rows: int = FORMATION_ROWS
    cols: int = FORMATION_COLS


@dataclass(frozen=True)
class SimulationConfig:
    """
    Settings for one game, built from a nested dictionary:

    .. code-block:: python

        SimulationConfig.from_dict({
            "window": {"width": 800, "height": 600, "fps": 60},
            "gameplay": {"lives": 3, "drop_chance": 0.1},
        })
    """

    window: WindowSettings = WindowSettings()
    gameplay: GameplaySettings = GameplaySettings()

    def __post_init__(self):
        self.validate()

    @property
    def width(self) -> int:
        return self.window.width

    @property
    def height(self) -> int:
        return self.window.height

    def drop_chance_for(self, level: int) -> float:
        """
        Power-up drop probability for a level, capped

        :param level: Current level
        :type level: int

        :return: float
        """
        g = self.gameplay
        return min(g.drop_chance_cap, g.drop_chance + (level - 1) * g.drop_chance_step)

    def validate(self) -> None:
        """
        :raise ConfigError: If a value is out of range
        """
        if self.window.width <= 0 or self.window.height <= 0:
            raise ConfigError("Window size must be positive")
        if self.window.fps <= 0:
            raise ConfigError("FPS must be positive")

        g = self.gameplay
        if g.lives < 1:
            raise ConfigError("Player needs at least one life")
        if g.shoot_cooldown < 1:
            raise ConfigError("Shoot cooldown must be at least one frame")
        if g.power_up_duration < 1:
            raise ConfigError("Power-up duration must be at least one frame")
        if g.rows < 1 or g.cols < 1:
            raise ConfigError("Formation needs at least one row and one column")
        for name in ("drop_chance", "drop_chance_step", "drop_chance_cap"):
            if not 0.0 <= getattr(g, name) <= 1.0:
                raise ConfigError(f"{name} must be between 0 and 1")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> SimulationConfig:
        """
        Build settings from a dictionary, unknown keys are ignored

        :param data: Settings with optional "window" and "gameplay" sections
        :type data: dict

        :raise ConfigError: If a section is not a mapping or a value is invalid

        :return: SimulationConfig
        """
        data = data or {}
        return cls(
            window=_section(WindowSettings, data.get("window")),
            gameplay=_section(GameplaySettings, data.get("gameplay")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _section(section_type, values):
    if values is None:
        return section_type()
    if not isinstance(values, dict):
        raise ConfigError(f"{section_type.__name__} expects a mapping")

    known = {f.name for f in fields(section_type)}
    unknown = set(values) - known
    if unknown:
        logger.warning(f"Ignoring unknown settings: {sorted(unknown)}")

    try:
        return section_type(**{k: v for k, v in values.items() if k in known})
    except TypeError as e:
        raise ConfigError(str(e)) from e
