import pytest

from space_invaders_sim.errors import InvalidTransitionError
from space_invaders_sim.state import GameState, StateMachine


def test_starts_in_menu():
    machine = StateMachine()
    assert machine.current is GameState.MENU
    assert machine.is_menu()
    assert not machine.is_playing()


def test_full_lifecycle():
    machine = StateMachine()
    machine.transition(GameState.PLAYING)
    assert machine.is_playing()

    machine.transition(GameState.GAME_OVER)
    assert machine.is_game_over()

    machine.transition(GameState.PLAYING)
    machine.transition(GameState.GAME_OVER)
    machine.transition(GameState.MENU)
    assert machine.is_menu()


@pytest.mark.parametrize(
    "start, target",
    [
        (GameState.MENU, GameState.GAME_OVER),
        (GameState.MENU, GameState.MENU),
        (GameState.PLAYING, GameState.MENU),
        (GameState.PLAYING, GameState.PLAYING),
    ],
)
def test_invalid_transitions(start, target):
    machine = StateMachine(start)
    assert not machine.can_transition(target)
    with pytest.raises(InvalidTransitionError) as exc:
        machine.transition(target)
    assert exc.value.current is start
    assert machine.current is start


def test_accepts_state_values():
    machine = StateMachine("menu")
    assert machine.transition("playing") is GameState.PLAYING
