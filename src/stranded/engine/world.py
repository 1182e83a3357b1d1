"""Immutable data structures for the game world.

The world is loaded once from world.json at startup and shared by every
session. Nothing here changes after loading: where a dropped item ends up
is tracked per session in GameState.dropped.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .errors import UnknownItemError, UnknownLocationError

_CAPITAL = re.compile(r"([A-Z])")


def humanize(identifier: str) -> str:
    """Turn a camelCase id into a display name: ``crashSite`` -> ``Crash Site``."""
    spaced = _CAPITAL.sub(r" \1", identifier)
    return spaced[:1].upper() + spaced[1:]


@dataclass(frozen=True)
class Location:
    """A place the player can stand in."""

    id: str
    description: str
    exits: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Item:
    """Something the player can pick up.

    ``location`` is the item's home placement. It stays authoritative for
    where the item lies whenever the player is not holding it and has not
    dropped it somewhere else.
    """

    id: str
    description: str
    location: str

    @property
    def name(self) -> str:
        return humanize(self.id)


@dataclass
class World:
    """The complete game world, loaded from world.json."""

    locations: dict[str, Location] = field(default_factory=dict)
    items: dict[str, Item] = field(default_factory=dict)
    start: str = "ship"

    def get_location(self, location_id: str) -> Location:
        try:
            return self.locations[location_id]
        except KeyError:
            raise UnknownLocationError(location_id) from None

    def get_item(self, item_id: str) -> Item:
        try:
            return self.items[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def placement(self, item_id: str, dropped: Mapping[str, str] | None = None) -> str:
        """Where an item lies when not held: its drop spot, else its home."""
        if dropped and item_id in dropped:
            return dropped[item_id]
        return self.get_item(item_id).location

    def items_at(
        self, location_id: str, dropped: Mapping[str, str] | None = None
    ) -> list[str]:
        """Item ids placed at a location, in catalog order.

        Held items are not filtered out here; callers that list what the
        player can see exclude the inventory themselves.
        """
        return [
            item_id
            for item_id in self.items
            if self.placement(item_id, dropped) == location_id
        ]

    def find_item(self, name: str, candidates: Iterable[str] | None = None) -> str | None:
        """Resolve a typed name to an item id by id or display name.

        Matching is case-insensitive. Only ``candidates`` are searched when
        given, otherwise the whole catalog in order.
        """
        wanted = name.lower()
        pool = self.items if candidates is None else candidates
        for item_id in pool:
            if item_id.lower() == wanted or humanize(item_id).lower() == wanted:
                return item_id
        return None
