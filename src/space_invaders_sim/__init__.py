"""
Space Invaders simulation core
"""

from space_invaders_sim.collision import BoxBody, HasBoundingBox, Rect, intersects
from space_invaders_sim.config import SimulationConfig
from space_invaders_sim.entities import (
    Enemy,
    InputState,
    Player,
    PowerUp,
    PowerUpKind,
    Projectile,
)
from space_invaders_sim.errors import (
    ConfigError,
    InvalidTransitionError,
    PersistenceError,
    SpaceInvadersError,
)
from space_invaders_sim.formation import Formation
from space_invaders_sim.persistence import JsonHighScoreStore, MemoryHighScoreStore
from space_invaders_sim.scenes.invaders import FrameSnapshot, HudSnapshot, Simulation
from space_invaders_sim.state import GameState, StateMachine

__version__ = "1.0.0"
