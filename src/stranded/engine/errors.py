"""Exceptions raised by the world catalog and its loader.

Player mistakes never raise; they come back as error results from
handle_command. These exceptions signal a broken world definition.
"""


class WorldError(LookupError):
    """Base exception for the world catalog."""


class UnknownLocationError(WorldError):
    """A location id is not part of the world."""


class UnknownItemError(WorldError):
    """An item id is not part of the world."""


class WorldLoadError(WorldError):
    """The world file is missing or is not valid JSON."""


class WorldDefinitionError(WorldError):
    """The world file loaded but describes an inconsistent world."""
