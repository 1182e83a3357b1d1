"""Command dispatch and handler functions.

handle_command(world, state, raw_input) -> CommandResult is the main entry
point. It tokenizes, dispatches to a handler and returns the handler's
text together with the next GameState. Handlers never change the state
they are given; they build a new one with dataclasses.replace.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from ..logging import get_logger
from .errors import UnknownLocationError
from .state import (
    ALIEN_ARTIFACT,
    COMMUNICATOR,
    COMPONENTS_NEEDED,
    POWER_CELL,
    PYRAMID,
    REPAIR_KIT,
    SHIP,
    CommandResult,
    GameState,
    new_game_state,
)
from .world import Location, World, humanize

logger = get_logger(__name__)

DIRECTIONS = ("north", "south", "east", "west", "enter")

HELP_TEXT = """Available commands:
  - help: Show this help message
  - look: Describe your current surroundings
  - go [direction]: Move in a direction (north, south, east, west)
  - inventory: Check your inventory
  - take [item]: Pick up an item
  - drop [item]: Drop an item from your inventory
  - use [item]: Use an item
  - examine [item]: Examine an item or object
  - health: Check your health status
  - clear: Clear the terminal screen
  - theme: Change terminal color theme

You can also type a direction (north, south, east, west) to move."""

VICTORY_TEXT = (
    "With the ship's systems repaired, the power cell installed, and the "
    "alien artifact providing navigation data, your ship is ready for launch! "
    "You've successfully completed your mission!"
)


def _ok(text: str, state: GameState) -> CommandResult:
    return CommandResult(text=text, state=state)


def _error(text: str, state: GameState) -> CommandResult:
    return CommandResult(text=text, state=state, is_error=True)


def _current_location(world: World, state: GameState) -> Location:
    """Look up where the player stands. A miss means the world is broken."""
    try:
        return world.get_location(state.location)
    except UnknownLocationError:
        logger.error("location_missing", location=state.location)
        raise


# --- Reading the world ---


def visible_items(world: World, state: GameState) -> list[str]:
    """Items lying at the current location that the player is not holding."""
    return [
        item_id
        for item_id in world.items_at(state.location, state.dropped)
        if not state.holds(item_id)
    ]


def describe_location(world: World, state: GameState) -> str:
    """Description, visible items and exits of the current location."""
    location = _current_location(world, state)
    text = location.description

    items_here = visible_items(world, state)
    if items_here:
        text += "\n\nYou can see:"
        for item_id in items_here:
            text += f"\n- {humanize(item_id)}"

    text += "\n\nExits:"
    for direction, destination in location.exits.items():
        text += f"\n- {direction} to {humanize(destination)}"
    return text


def get_exits(world: World, state: GameState) -> dict[str, str]:
    """Map of direction -> display name of where it leads."""
    location = _current_location(world, state)
    return {
        direction: humanize(destination)
        for direction, destination in location.exits.items()
    }


def get_inventory(world: World, state: GameState) -> list[str]:
    """Display names of held items, in pickup order."""
    return [world.get_item(item_id).name for item_id in state.inventory]


# --- Handlers ---
#
# Every handler takes (world, state, action, argument) so they can share
# one dispatch table. ``argument`` is everything after the action word,
# re-joined with single spaces.


def _cmd_help(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    return _ok(HELP_TEXT, state)


def _cmd_look(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    return _ok(describe_location(world, state), state)


def _cmd_go(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    """Handle GO/MOVE <direction> and bare direction words."""
    if action in ("go", "move"):
        if not argument:
            return _error("Go where? Please specify a direction.", state)
        direction = argument.split()[0]
    else:
        direction = action

    location = _current_location(world, state)
    destination = location.exits.get(direction)
    if destination is None:
        return _error(f"You can't go {direction} from here.", state)

    moved = replace(
        state,
        location=destination,
        visited=state.visited | {destination},
    )
    return _ok(describe_location(world, moved), moved)


def _cmd_inventory(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    if not state.inventory:
        return _ok("Your inventory is empty.", state)

    text = "You are carrying:"
    for item_id in state.inventory:
        item = world.get_item(item_id)
        text += f"\n- {item.name}: {item.description}"
    return _ok(text, state)


def _cmd_take(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    """Handle TAKE.

    Only the inventory changes. The item's placement is left alone, so a
    held item is hidden from LOOK by inventory membership alone.
    """
    if not argument:
        return _error("Take what?", state)

    item_id = world.find_item(argument)
    if item_id is None:
        return _error(f"I don't see a {argument} here.", state)

    name = humanize(item_id)
    if world.placement(item_id, state.dropped) != state.location:
        return _error(f"I don't see a {name} here.", state)
    if state.holds(item_id):
        return _error(f"You already have the {name}.", state)

    taken = replace(state, inventory=state.inventory + (item_id,))
    return _ok(f"You pick up the {name}.", taken)


def _cmd_drop(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    """Handle DROP: the item now lies at the current location."""
    if not argument:
        return _error("Drop what?", state)

    item_id = world.find_item(argument, state.inventory)
    if item_id is None:
        return _error(f"You don't have a {argument}.", state)

    dropped = replace(
        state,
        inventory=tuple(i for i in state.inventory if i != item_id),
        dropped={**state.dropped, item_id: state.location},
    )
    logger.debug("item_dropped", item=item_id, location=state.location)
    return _ok(f"You drop the {humanize(item_id)}.", dropped)


def _cmd_examine(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    """Handle EXAMINE: held items first, then whatever lies here."""
    if not argument:
        return _error("Examine what?", state)

    item_id = world.find_item(argument, state.inventory)
    if item_id is None:
        item_id = world.find_item(
            argument, world.items_at(state.location, state.dropped)
        )
    if item_id is None:
        return _error(f"You don't see a {argument} here.", state)

    item = world.get_item(item_id)
    return _ok(f"{item.name}: {item.description}", state)


def _cmd_use(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    if not argument:
        return _error("Use what?", state)

    item_id = world.find_item(argument, state.inventory)
    if item_id is None:
        return _error(f"You don't have a {argument}.", state)

    effect = ITEM_EFFECTS.get(item_id, _use_unknown)
    return effect(world, state, item_id)


def _cmd_status(world: World, state: GameState, action: str, argument: str) -> CommandResult:
    if state.health >= 75:
        condition = "Good"
    elif state.health >= 50:
        condition = "Moderate"
    elif state.health >= 25:
        condition = "Poor"
    else:
        condition = "Critical"

    if state.progress == 0:
        objective = "Explore the area and find a way to repair your ship."
    elif state.progress < COMPONENTS_NEEDED:
        objective = "Continue gathering components to repair your ship."
    else:
        objective = "Return to your ship to complete repairs and launch!"

    return _ok(
        f"Health: {state.health}% ({condition})\n"
        f"Mission Objective: {objective}\n"
        f"Progress: {state.progress}/{COMPONENTS_NEEDED} ship components installed",
        state,
    )


def _cmd_restart(world: World, state: GameState) -> CommandResult:
    fresh = new_game_state(world)
    logger.info("game_restarted", won=state.won)
    return _ok(
        "Starting a new game...\n\n" + world.get_location(fresh.location).description,
        fresh,
    )


def _static_response(msg: str):
    """Return a handler that ignores its arguments and returns a fixed message."""
    def handler(world: World, state: GameState, action: str, argument: str) -> CommandResult:
        return _ok(msg, state)
    return handler


# --- USE effects ---


@dataclass(frozen=True)
class WinCheck:
    """Which items must or must not be held around a component install.

    ``before`` is the inventory as it was when USE was typed, ``after`` the
    inventory once the component is removed. Together with the progress
    threshold these decide whether installing a component launches the ship.
    """

    held_before: frozenset[str] = frozenset()
    absent_before: frozenset[str] = frozenset()
    held_after: frozenset[str] = frozenset()
    absent_after: frozenset[str] = frozenset()

    def passes(self, before: tuple[str, ...], after: tuple[str, ...]) -> bool:
        return (
            self.held_before.issubset(before)
            and self.absent_before.isdisjoint(before)
            and self.held_after.issubset(after)
            and self.absent_after.isdisjoint(after)
        )


@dataclass(frozen=True)
class Component:
    """A ship part that counts towards launch when used at the ship."""

    installed: str
    incomplete: str
    elsewhere: str
    win: WinCheck


# The three checks are not symmetric. They are kept exactly as the game
# has always played; see DESIGN.md.
COMPONENTS: dict[str, Component] = {
    REPAIR_KIT: Component(
        installed="You use the repair kit to fix some of the ship's systems.",
        incomplete="You'll need more components to fully repair the ship.",
        elsewhere="The repair kit would be more useful at your ship.",
        win=WinCheck(held_before=frozenset({POWER_CELL, ALIEN_ARTIFACT})),
    ),
    POWER_CELL: Component(
        installed=(
            "You install the power cell into the ship's main reactor. "
            "The lights flicker on!"
        ),
        incomplete=(
            "The ship is gaining power, but you'll need more components "
            "to fully repair it."
        ),
        elsewhere="The power cell would be more useful at your ship.",
        win=WinCheck(
            held_after=frozenset({ALIEN_ARTIFACT}),
            absent_before=frozenset({REPAIR_KIT}),
        ),
    ),
    ALIEN_ARTIFACT: Component(
        installed=(
            "You connect the alien artifact to the ship's navigation system. "
            "The star charts update with new information!"
        ),
        incomplete=(
            "The navigation system is working, but you'll need more "
            "components to fully repair the ship."
        ),
        elsewhere="Nothing happens when you use the artifact here.",
        win=WinCheck(absent_after=frozenset({POWER_CELL, REPAIR_KIT})),
    ),
}


def _install_component(world: World, state: GameState, item_id: str) -> CommandResult:
    """Use a ship component: only works aboard the ship.

    The component leaves the inventory but keeps its placement, so it can
    be found where it lay before it was picked up.
    """
    component = COMPONENTS[item_id]
    if state.location != SHIP:
        return _ok(component.elsewhere, state)

    before = state.inventory
    after = tuple(i for i in before if i != item_id)
    progress = state.progress + 1
    logger.info("component_installed", item=item_id, progress=progress)

    if progress >= COMPONENTS_NEEDED and component.win.passes(before, after):
        logger.info("game_won", item=item_id, progress=progress)
        won = replace(
            state,
            inventory=after,
            progress=progress,
            game_over=True,
            won=True,
        )
        return _ok(f"{component.installed}\n\n{VICTORY_TEXT}", won)

    installed = replace(state, inventory=after, progress=progress)
    return _ok(f"{component.installed}\n\n{component.incomplete}", installed)


def _use_artifact(world: World, state: GameState, item_id: str) -> CommandResult:
    if state.location == PYRAMID:
        return _ok(
            "The artifact glows brightly in response to the symbols on the "
            "pyramid walls. Strange patterns appear, possibly a map of some kind.",
            state,
        )
    return _install_component(world, state, item_id)


def _use_communicator(world: World, state: GameState, item_id: str) -> CommandResult:
    return _ok(
        "You attempt to call for help, but only static comes through. "
        "It seems the communicator is damaged or out of range.",
        state,
    )


def _use_unknown(world: World, state: GameState, item_id: str) -> CommandResult:
    return _ok(f"You're not sure how to use the {humanize(item_id)} here.", state)


ITEM_EFFECTS: dict[str, Callable[[World, GameState, str], CommandResult]] = {
    REPAIR_KIT: _install_component,
    POWER_CELL: _install_component,
    ALIEN_ARTIFACT: _use_artifact,
    COMMUNICATOR: _use_communicator,
}


_VERB_DISPATCH: dict[str, Callable] = {
    "help": _cmd_help,
    "look": _cmd_look,
    **dict.fromkeys(("go", "move", *DIRECTIONS), _cmd_go),
    **dict.fromkeys(("inventory", "i"), _cmd_inventory),
    **dict.fromkeys(("take", "get", "pickup"), _cmd_take),
    "use": _cmd_use,
    **dict.fromkeys(("examine", "inspect"), _cmd_examine),
    "drop": _cmd_drop,
    **dict.fromkeys(("health", "status"), _cmd_status),
    "clear": _static_response("Screen cleared."),
    "theme": _static_response("Use the color buttons at the top to change the theme."),
}


def parse_command(raw_input: str) -> tuple[str, str]:
    """Split input into (action, argument), both lower-cased.

    The argument is re-joined with single spaces, so runs of whitespace
    inside it collapse.
    """
    words = raw_input.lower().split()
    if not words:
        return "", ""
    return words[0], " ".join(words[1:])


def handle_command(world: World, state: GameState, raw_input: str) -> CommandResult:
    """Process a command and return the response with the next state."""
    action, argument = parse_command(raw_input)

    # Once the game has ended only RESTART is accepted.
    if state.game_over:
        if action == "restart":
            return _cmd_restart(world, state)
        if state.won:
            return _ok('Game complete! Type "restart" to play again.', state)
        return _ok('Game over! Type "restart" to try again.', state)

    if not action:
        return _error("I beg your pardon?", state)

    handler = _VERB_DISPATCH.get(action)
    if handler is None:
        result = _error(
            f"I don't understand '{raw_input.strip()}'. "
            "Type 'help' for a list of commands.",
            state,
        )
    else:
        result = handler(world, state, action, argument)

    logger.debug(
        "command_processed",
        action=action,
        location=result.state.location,
        is_error=result.is_error,
    )
    return result
