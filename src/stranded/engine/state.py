"""Per-player game state.

GameState is never changed in place: every command hands back a new value
built with dataclasses.replace. It holds only ids, numbers and flags, no
World references, so one World can serve any number of sessions.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from .world import World

# Starting location
START_LOCATION = "ship"

# Where ship components have to be installed
SHIP = "ship"

# Ship components
REPAIR_KIT = "repairKit"
POWER_CELL = "powerCell"
ALIEN_ARTIFACT = "alienArtifact"
COMMUNICATOR = "communicator"

# Where the artifact reacts
PYRAMID = "pyramid"

# Components needed before the ship can launch
COMPONENTS_NEEDED = 3

MAX_HEALTH = 100


@dataclass(frozen=True)
class GameState:
    """Everything one player's game needs besides the shared World."""

    location: str = START_LOCATION
    # Held item ids in pickup order
    inventory: tuple[str, ...] = ()
    visited: frozenset[str] = field(
        default_factory=lambda: frozenset({START_LOCATION})
    )
    progress: int = 0
    health: int = MAX_HEALTH
    game_over: bool = False
    won: bool = False
    # item id -> location id where the player last dropped it
    dropped: Mapping[str, str] = field(default_factory=dict)

    def holds(self, item_id: str) -> bool:
        return item_id in self.inventory


@dataclass(frozen=True)
class CommandResult:
    """What one command produced.

    ``is_error`` only affects how the text is displayed; ``state`` is
    applied either way.
    """

    text: str
    state: GameState
    is_error: bool = False


def new_game_state(world: World) -> GameState:
    """Create a fresh game state at the world's starting location."""
    return GameState(location=world.start, visited=frozenset({world.start}))
