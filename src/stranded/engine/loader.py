"""Load world.json into a World object.

The file holds a start location, a table of locations with their exits
and a table of items with their home locations. Key order is kept: it is
the order items are listed in when the player looks around.
"""

import json
from pathlib import Path
from typing import Any

from .errors import WorldDefinitionError, WorldLoadError
from .world import Item, Location, World


def _read_json(data_path: Path) -> Any:
    try:
        text = Path(data_path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise WorldLoadError(f"World file not found: {data_path}") from exc
    except OSError as exc:
        raise WorldLoadError(f"Unable to read world file: {data_path}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise WorldLoadError(f"Invalid JSON in {data_path}: {exc}") from exc


def _require_table(raw: dict, key: str) -> dict:
    table = raw.get(key)
    if not isinstance(table, dict):
        raise WorldDefinitionError(f"World file needs a {key!r} table")
    return table


def _require_text(entry: dict, key: str, where: str) -> str:
    value = entry.get(key) if isinstance(entry, dict) else None
    if not isinstance(value, str):
        raise WorldDefinitionError(f"{where} needs a string {key!r}")
    return value


def _parse_locations(raw: dict) -> dict[str, Location]:
    locations = {}
    for location_id, entry in _require_table(raw, "locations").items():
        where = f"Location {location_id!r}"
        description = _require_text(entry, "description", where)
        exits = entry.get("exits", {})
        if not isinstance(exits, dict):
            raise WorldDefinitionError(f"{where} has malformed exits")
        locations[location_id] = Location(
            id=location_id, description=description, exits=dict(exits)
        )
    return locations


def _parse_items(raw: dict) -> dict[str, Item]:
    items = {}
    for item_id, entry in _require_table(raw, "items").items():
        where = f"Item {item_id!r}"
        items[item_id] = Item(
            id=item_id,
            description=_require_text(entry, "description", where),
            location=_require_text(entry, "location", where),
        )
    return items


def validate_world(world: World) -> None:
    """Check that every reference in the world points at a real location."""
    if world.start not in world.locations:
        raise WorldDefinitionError(f"Start location {world.start!r} does not exist")

    for location in world.locations.values():
        for direction, destination in location.exits.items():
            if destination not in world.locations:
                raise WorldDefinitionError(
                    f"Exit {direction!r} from {location.id!r} leads to "
                    f"unknown location {destination!r}"
                )

    for item in world.items.values():
        if item.location not in world.locations:
            raise WorldDefinitionError(
                f"Item {item.id!r} is placed at unknown location {item.location!r}"
            )


def load_world(data_path: Path) -> World:
    """Parse world.json and return a validated World."""
    raw = _read_json(data_path)
    if not isinstance(raw, dict):
        raise WorldDefinitionError("World file must hold a JSON object")

    start = raw.get("start")
    if not isinstance(start, str):
        raise WorldDefinitionError("World file needs a string 'start'")

    world = World(
        locations=_parse_locations(raw),
        items=_parse_items(raw),
        start=start,
    )
    validate_world(world)
    return world
