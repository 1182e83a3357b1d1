"""Test that the game can be played through to every ending.

Route reference:
  ship --north--> crash site --east--> forest --east--> clearing --enter--> pyramid
  crash site --west--> canyon --north--> river bank --west--> cave

The alien artifact lies in the pyramid, the power cell in the cave and the
repair kit aboard the ship. Installing a component takes it out of the
inventory but leaves it where it was picked up, so the repair kit can be
fetched and installed again.
"""

import pytest

from stranded.engine.commands import handle_command
from stranded.engine.state import GameState
from stranded.engine.world import World

COLLECT_ALL = [
    "take repair kit",
    "north",
    "east",
    "east",
    "enter",
    "take alien artifact",
    "south",
    "west",
    "west",
    "west",
    "north",
    "west",
    "take power cell",
    "east",
    "south",
    "east",
    "south",
]


def _run(world: World, state: GameState, commands: list[str]) -> GameState:
    """Run commands that must all succeed without ending the game."""
    for cmd in commands:
        result = handle_command(world, state, cmd)
        assert not result.is_error, f"{cmd!r} failed: {result.text}"
        assert not result.state.game_over, f"Game ended unexpectedly after {cmd!r}"
        state = result.state
    return state


@pytest.fixture
def collected(world: World, state: GameState) -> GameState:
    """Back aboard the ship holding all three components."""
    return _run(world, state, COLLECT_ALL)


def test_collect_everything(world: World, collected: GameState):
    assert collected.location == "ship"
    assert collected.inventory == ("repairKit", "alienArtifact", "powerCell")
    assert collected.visited == set(world.locations)
    assert collected.progress == 0


@pytest.mark.parametrize(
    ("setup", "finale"),
    [
        (["use repair kit", "use power cell"], "use alien artifact"),
        (["use repair kit", "take repair kit", "use repair kit"], "use power cell"),
        (
            ["use repair kit", "take repair kit", "use repair kit", "take repair kit"],
            "use repair kit",
        ),
    ],
    ids=["artifact-last", "power-cell-last", "repair-kit-last"],
)
def test_launch(world: World, collected: GameState, setup: list[str], finale: str):
    """Each component can be the one that completes the ship."""
    state = _run(world, collected, setup)
    assert state.progress == 2

    result = handle_command(world, state, finale)
    assert result.state.game_over
    assert result.state.won
    assert result.state.progress == 3
    assert "successfully completed your mission" in result.text


def test_wrong_order_does_not_launch(world: World, collected: GameState):
    """Installing the repair kit last after the others leaves the ship grounded."""
    state = _run(
        world,
        collected,
        ["use power cell", "use alien artifact", "use repair kit", "status"],
    )
    assert state.progress == 3
    assert not state.won
    status = handle_command(world, state, "status")
    assert "Return to your ship" in status.text


def test_play_again_after_winning(world: World, collected: GameState):
    state = _run(world, collected, ["use repair kit", "use power cell"])
    won = handle_command(world, state, "use alien artifact").state

    refused = handle_command(world, won, "north")
    assert refused.text == 'Game complete! Type "restart" to play again.'
    assert refused.state is won

    fresh = handle_command(world, won, "restart").state
    assert fresh == GameState()
    again = handle_command(world, fresh, "look")
    assert "- Repair Kit" in again.text
