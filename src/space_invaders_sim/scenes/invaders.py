"""
Space Invaders simulation
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol

from space_invaders_sim.config import SimulationConfig
from space_invaders_sim.constants import PLAYER_BOTTOM_OFFSET
from space_invaders_sim.entities import (
    Enemy,
    InputState,
    Player,
    PowerUp,
    Projectile,
)
from space_invaders_sim.formation import Formation
from space_invaders_sim.persistence import HighScoreStore
from space_invaders_sim.state import GameState, StateMachine
from space_invaders_sim.utils import logger


class InputSource(Protocol):
    """Current state of left, right and fire."""

    def poll(self) -> InputState: ...


@dataclass(frozen=True)
class HudSnapshot:
    score: int
    high_score: int
    lives: int
    level: int


@dataclass(frozen=True)
class FrameSnapshot:
    """
    What a renderer needs for one frame. Entities are live handles and
    must be treated as read-only.
    """

    state: GameState
    viewport: tuple[float, float]
    player: Player
    enemies: tuple[Enemy, ...]
    enemy_bullets: tuple[Projectile, ...]
    player_bullets: tuple[Projectile, ...]
    power_ups: tuple[PowerUp, ...]
    hud: HudSnapshot
    is_new_high_score: bool = False


class Renderer(Protocol):
    def render(self, snapshot: FrameSnapshot) -> None: ...


class Presenter(Protocol):
    """Gets told about score, lives, level and screen changes."""

    def update_hud(self, hud: HudSnapshot) -> None: ...

    def show_game_over(self, final_score: int, is_new_high_score: bool) -> None: ...

    def show_menu(self, high_score: int) -> None: ...


@dataclass
class SimulationWorld:
    """
    Everything that changes while a game is being played
    """

    config: SimulationConfig
    player: Player
    formation: Formation
    rng: random.Random
    power_ups: list[PowerUp] = field(default_factory=list)
    score: int = 0
    level: int = 1
    drop_chance: float = 0.0

    @classmethod
    def create(cls, config: SimulationConfig, rng: random.Random) -> SimulationWorld:
        """
        Build a fresh world for a new run

        :param config: Game settings
        :type config: SimulationConfig

        :param rng: Random source shared by every random decision
        :type rng: random.Random

        :return: SimulationWorld
        """
        width, height = config.width, config.height
        g = config.gameplay

        player = Player(
            start_x=width / 2,
            start_y=height - PLAYER_BOTTOM_OFFSET,
            canvas_width=width,
            speed=g.player_speed,
            max_lives=g.lives,
            base_cooldown=g.shoot_cooldown,
            power_up_duration=g.power_up_duration,
        )
        formation = Formation(
            canvas_width=width,
            canvas_height=height,
            rng=rng,
            rows=g.rows,
            cols=g.cols,
        )
        return cls(
            config=config,
            player=player,
            formation=formation,
            rng=rng,
            drop_chance=config.drop_chance_for(1),
        )

    @property
    def viewport(self) -> tuple[float, float]:
        return (self.config.width, self.config.height)

    def next_level(self) -> None:
        """
        Bring the formation back, faster, for the next level
        """
        self.level += 1
        self.power_ups = []
        self.player.bullets = []
        self.player.recenter()
        self.formation.reset(self.level)
        self.drop_chance = self.config.drop_chance_for(self.level)

        logger.debug(f"Level {self.level}, drop chance {self.drop_chance:.2f}")


@dataclass
class SimulationTickContext:
    """
    Per-frame context handed to each system
    """

    world: SimulationWorld
    intent: InputState
    level_cleared: bool = False
    hud_changed: bool = False
    game_over: bool = False


@dataclass
class PlayerSystem:
    """
    Move the ship, fire and decay power-ups.
    """

    name: str = "space_invaders_player"
    order: int = 20

    def step(self, ctx: SimulationTickContext):
        ctx.world.player.advance(ctx.intent)


@dataclass
class FormationSystem:
    name: str = "space_invaders_formation"
    order: int = 30

    def step(self, ctx: SimulationTickContext):
        ctx.world.formation.tick(ctx.world.level)


@dataclass
class BulletEnemyCollisionSystem:
    """Destroys enemies hit by player bullets, scores and drops power-ups."""

    name: str = "space_invaders_bullet_enemy_collision"
    order: int = 40

    def step(self, ctx: SimulationTickContext):
        w = ctx.world

        for bullet in list(w.player.bullets):
            if not bullet.active:
                continue

            enemy = w.formation.resolve_hit(bullet)
            if enemy is None:
                continue

            bullet.active = False
            w.score += enemy.points
            ctx.hud_changed = True
            logger.debug(
                f"Enemy at row {enemy.row} col {enemy.col} destroyed, score {w.score}"
            )

            if w.rng.random() < w.drop_chance:
                power_up = PowerUp.spawn(enemy.x, enemy.y, w.rng)
                w.power_ups.append(power_up)
                logger.debug(f"Dropped {power_up.kind.value} power-up")

            if w.formation.all_destroyed():
                w.next_level()
                ctx.level_cleared = True
                # bullets from the cleared wave must not hit the new one
                break


@dataclass
class BulletCullSystem:
    """Removes player bullets that are dead or out of viewport."""

    name: str = "space_invaders_bullet_cull"
    order: int = 50

    def step(self, ctx: SimulationTickContext):
        w = ctx.world
        _, vh = w.viewport

        w.player.bullets = [
            b for b in w.player.bullets if b.active and not b.is_off_screen(vh)
        ]


@dataclass
class PowerUpMoveSystem:
    name: str = "space_invaders_power_up_move"
    order: int = 52

    def step(self, ctx: SimulationTickContext):
        w = ctx.world
        if not w.power_ups:
            return
        _, vh = w.viewport

        for p in w.power_ups:
            p.advance()
        w.power_ups = [p for p in w.power_ups if p.active and not p.is_off_screen(vh)]


@dataclass
class PowerUpCollectSystem:
    name: str = "space_invaders_power_up_collect"
    order: int = 55

    def step(self, ctx: SimulationTickContext):
        w = ctx.world
        for p in w.power_ups:
            if p.active and p.collides_with(w.player):
                w.player.activate_power_up(p.kind)
                p.active = False
                logger.debug(f"Collected {p.kind.value}")


@dataclass
class EnemyBulletPlayerCollisionSystem:
    """
    Enemy bullets against the ship. A life lost recenters the ship,
    the last life ends the game.
    """

    name: str = "space_invaders_enemy_bullet_player_collision"
    order: int = 60

    def step(self, ctx: SimulationTickContext):
        w = ctx.world
        if not w.formation.hit_player(w.player):
            return

        if not w.player.take_damage():
            logger.debug("Shield absorbed a hit")
            return

        ctx.hud_changed = True
        logger.debug(f"Player hit, {w.player.lives} lives left")

        if w.player.lives <= 0:
            ctx.game_over = True
            return

        w.player.recenter()


@dataclass
class BaselineSystem:
    """
    Enemies reaching the baseline, or the ship itself, end the game.
    The shield does not help here.
    """

    name: str = "space_invaders_baseline"
    order: int = 70

    def step(self, ctx: SimulationTickContext):
        w = ctx.world
        _, vh = w.viewport

        if w.formation.reached_baseline(vh) or w.formation.overruns(w.player):
            logger.debug("Formation reached the baseline")
            w.player.lives = 0
            ctx.hud_changed = True
            ctx.game_over = True


def default_systems() -> list:
    return [
        PlayerSystem(),
        FormationSystem(),
        BulletEnemyCollisionSystem(),
        BulletCullSystem(),
        PowerUpMoveSystem(),
        PowerUpCollectSystem(),
        EnemyBulletPlayerCollisionSystem(),
        BaselineSystem(),
    ]


# pylint: disable=too-many-instance-attributes
class Simulation:
    """
    Owns the world and runs the per-frame pipeline while playing.

    Collaborators are injected: ``input_source`` is polled once per tick,
    ``renderer`` gets a snapshot on ``render()``, ``high_scores`` is read
    once at construction and written at game over, ``presenter`` is told
    about HUD and screen changes.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        input_source: InputSource,
        config: SimulationConfig | None = None,
        renderer: Renderer | None = None,
        high_scores: HighScoreStore | None = None,
        presenter: Presenter | None = None,
        rng: random.Random | None = None,
        systems: list | None = None,
    ):
        self.config = config or SimulationConfig()
        self.input_source = input_source
        self.renderer = renderer
        self.high_scores = high_scores
        self.presenter = presenter
        self.rng = rng or random.Random()
        self.systems = sorted(
            systems if systems is not None else default_systems(), key=lambda s: s.order
        )

        self._state = StateMachine()
        self._high_score = self._load_high_score()
        self._is_new_high_score = False
        self.world = SimulationWorld.create(self.config, self.rng)

        logger.debug(f"Simulation ready, high score {self._high_score}")

    # Read accessors

    @property
    def state(self) -> GameState:
        return self._state.current

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def level(self) -> int:
        return self.world.level

    @property
    def lives(self) -> int:
        return self.world.player.lives

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def is_new_high_score(self) -> bool:
        return self._is_new_high_score

    @property
    def player(self) -> Player:
        return self.world.player

    @property
    def formation(self) -> Formation:
        return self.world.formation

    @property
    def power_ups(self) -> list[PowerUp]:
        return self.world.power_ups

    def hud(self) -> HudSnapshot:
        return HudSnapshot(
            score=self.score,
            high_score=self._high_score,
            lives=self.lives,
            level=self.level,
        )

    def snapshot(self) -> FrameSnapshot:
        w = self.world
        return FrameSnapshot(
            state=self.state,
            viewport=w.viewport,
            player=w.player,
            enemies=tuple(w.formation.enemies),
            enemy_bullets=tuple(w.formation.enemy_bullets),
            player_bullets=tuple(w.player.bullets),
            power_ups=tuple(w.power_ups),
            hud=self.hud(),
            is_new_high_score=self._is_new_high_score,
        )

    # Lifecycle

    def start(self) -> None:
        """
        Start a new run from the menu or from the game over screen

        :raise InvalidTransitionError: If a game is already being played
        """
        self._state.transition(GameState.PLAYING)
        self._is_new_high_score = False
        self.world = SimulationWorld.create(self.config, self.rng)

        logger.info("Game started")
        self._notify_hud()

    restart = start

    def show_menu(self) -> None:
        """
        Go back to the menu after a game over

        :raise InvalidTransitionError: If not on the game over screen
        """
        self._state.transition(GameState.MENU)
        if self.presenter is not None:
            self.presenter.show_menu(self._high_score)

    def next_level(self) -> None:
        self.world.next_level()
        self._notify_hud()

    def tick(self) -> bool:
        """
        Run one frame of the simulation

        :return: False when not playing and nothing ran
        :rtype: bool
        """
        if not self._state.is_playing():
            return False

        ctx = SimulationTickContext(world=self.world, intent=self.input_source.poll())
        for system in self.systems:
            system.step(ctx)
            if ctx.game_over:
                break

        if ctx.game_over:
            self._game_over()
        elif ctx.hud_changed or ctx.level_cleared:
            self._notify_hud()

        return True

    def render(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.snapshot())

    def _game_over(self) -> None:
        score = self.world.score
        self._is_new_high_score = score > self._high_score
        if self._is_new_high_score:
            self._high_score = score

        self._state.transition(GameState.GAME_OVER)
        if self._is_new_high_score:
            self._save_high_score(score)

        logger.info(
            f"Game over at level {self.world.level} with {score} points"
            f"{' (new high score)' if self._is_new_high_score else ''}"
        )

        self._notify_hud()
        if self.presenter is not None:
            self.presenter.show_game_over(score, self._is_new_high_score)

    def _notify_hud(self) -> None:
        if self.presenter is not None:
            self.presenter.update_hud(self.hud())

    def _load_high_score(self) -> int:
        if self.high_scores is None:
            return 0

        try:
            return int(self.high_scores.load_high_score())
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(f"Could not load high score, using 0: {e}")
            return 0

    def _save_high_score(self, score: int) -> None:
        if self.high_scores is None:
            return

        try:
            self.high_scores.save_high_score(score)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(f"Could not save high score: {e}")
