"""
Game state machine
"""

from __future__ import annotations

from enum import Enum

from space_invaders_sim.errors import InvalidTransitionError
from space_invaders_sim.utils import logger


class GameState(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


TRANSITIONS: dict[GameState, frozenset[GameState]] = {
    GameState.MENU: frozenset({GameState.PLAYING}),
    GameState.PLAYING: frozenset({GameState.GAME_OVER}),
    GameState.GAME_OVER: frozenset({GameState.PLAYING, GameState.MENU}),
}


class StateMachine:
    """
    Tracks whether the game is in the menu, playing or over.
    Only PLAYING runs the simulation.
    """

    def __init__(self, initial: GameState = GameState.MENU):
        self._current = GameState(initial)

    @property
    def current(self) -> GameState:
        return self._current

    def is_menu(self) -> bool:
        return self._current is GameState.MENU

    def is_playing(self) -> bool:
        return self._current is GameState.PLAYING

    def is_game_over(self) -> bool:
        return self._current is GameState.GAME_OVER

    def can_transition(self, target: GameState) -> bool:
        return GameState(target) in TRANSITIONS[self._current]

    def transition(self, target: GameState) -> GameState:
        """
        Move to another state

        :param target: State to move to
        :type target: GameState

        :raise InvalidTransitionError: If the move is not allowed

        :return: GameState
        """
        target = GameState(target)
        if not self.can_transition(target):
            raise InvalidTransitionError(self._current, target)

        logger.debug(f"State {self._current.value} -> {target.value}")
        self._current = target
        return target
