"""
Pygame host for the Space Invaders simulation.
"""

from __future__ import annotations

import os
from typing import Callable, Sequence

import pygame

from space_invaders_sim.config import SimulationConfig, WindowSettings
from space_invaders_sim.constants import FPS, HIGH_SCORE_PATH, WINDOW_SIZE, WINDOW_TITLE
from space_invaders_sim.entities import InputState
from space_invaders_sim.persistence import JsonHighScoreStore
from space_invaders_sim.renderer import PygameRenderer
from space_invaders_sim.scenes.invaders import Simulation
from space_invaders_sim.state import GameState
from space_invaders_sim.utils import configure_logging, logger

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
FIRE_KEYS = (pygame.K_SPACE,)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


class KeyboardInput:
    """
    Polls the keyboard state once per frame
    """

    def __init__(self, get_pressed: Callable[[], Sequence[bool]] = pygame.key.get_pressed):
        """
        :param get_pressed: Returns the pressed state indexed by key code
        :type get_pressed: Callable
        """
        self._get_pressed = get_pressed

    def poll(self) -> InputState:
        keys = self._get_pressed()
        return InputState(
            left=any(keys[k] for k in LEFT_KEYS),
            right=any(keys[k] for k in RIGHT_KEYS),
            fire=any(keys[k] for k in FIRE_KEYS),
        )


def set_screen(window: WindowSettings) -> pygame.Surface:
    """
    Open the game window

    :param window: Size and title of the window
    :type window: WindowSettings

    :return: pygame.Surface
    """
    pygame.display.set_caption(window.title)
    return pygame.display.set_mode((window.width, window.height))


def handle_events(game: Simulation, events) -> bool:
    """
    Handle window and menu events

    :param game: Running simulation
    :type game: Simulation

    :param events: Events for this frame
    :type events: Iterable[pygame.event.Event]

    :return: False when the window should close
    :rtype: bool
    """
    for event in events:
        if event.type == pygame.QUIT:
            logger.debug("Quitting the game")
            return False
        if event.type != pygame.KEYDOWN:
            continue

        if event.key == pygame.K_ESCAPE:
            logger.debug("Quitting the game")
            return False
        if event.key in START_KEYS and game.state is not GameState.PLAYING:
            game.start()
        elif event.key == pygame.K_m and game.state is GameState.GAME_OVER:
            game.show_menu()

    return True


def run():
    """
    Main entry point for Space Invaders.

    - Opens the window and polls the keyboard.
    - Ticks the simulation once per frame at the configured FPS.
    - Keeps the high score in a JSON file in the home directory.
    """
    configure_logging(os.environ.get("SPACE_INVADERS_LOG_LEVEL", "INFO"))

    w_width, w_height = WINDOW_SIZE

    # NOTE: dictionary based so settings can later come from a file
    settings_data = {
        "window": {
            "width": w_width,
            "height": w_height,
            "title": WINDOW_TITLE,
            "fps": FPS,
        },
    }
    config = SimulationConfig.from_dict(settings_data)
    logger.info(config.to_dict())

    pygame.init()
    screen = set_screen(config.window)
    renderer = PygameRenderer(screen)

    game = Simulation(
        KeyboardInput(),
        config=config,
        renderer=renderer,
        high_scores=JsonHighScoreStore(HIGH_SCORE_PATH),
        presenter=renderer,
    )

    clock = pygame.time.Clock()
    carry_on = True

    logger.info("Starting Space Invaders...")
    while carry_on:
        clock.tick(config.window.fps)
        carry_on = handle_events(game, pygame.event.get())
        game.tick()
        game.render()

    pygame.quit()


if __name__ == "__main__":
    run()
