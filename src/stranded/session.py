"""Session layer bridging the game engine and connected players.

Games live in memory only. Each client certificate gets its own
GameSession; all of them share the one World loaded at startup.
"""

from collections import OrderedDict, deque
from dataclasses import dataclass
from threading import Lock

from .engine.commands import (
    describe_location,
    get_exits,
    get_inventory,
    handle_command,
    parse_command,
    visible_items,
)
from .engine.state import CommandResult, new_game_state
from .engine.world import World, humanize
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """One line of the transcript: what was typed and what came back."""

    command: str
    result: str
    is_error: bool = False


class GameSession:
    """Wraps a player's current GameState and transcript.

    Commands from the same player are applied one at a time.
    """

    def __init__(self, world: World, history_limit: int = 50):
        self.world = world
        self.state = new_game_state(world)
        self.history: deque[HistoryEntry] = deque(maxlen=history_limit)
        self._lock = Lock()

    def process_command(self, raw_input: str) -> CommandResult | None:
        """Run one command, apply its state and record it.

        Blank input is ignored and returns None.
        """
        command = raw_input.strip()
        if not command:
            return None

        action, _ = parse_command(command)
        with self._lock:
            was_over = self.state.game_over
            result = handle_command(self.world, self.state, command)
            self.state = result.state

            if action == "clear" and not was_over:
                self.history.clear()
            else:
                self.history.append(HistoryEntry(command, result.text, result.is_error))
        return result

    def get_room_description(self) -> str:
        return describe_location(self.world, self.state)

    def get_room_name(self) -> str:
        return humanize(self.state.location)

    def get_exits(self) -> dict[str, str]:
        return get_exits(self.world, self.state)

    def get_visible_items(self) -> list[str]:
        return [humanize(i) for i in visible_items(self.world, self.state)]

    def get_inventory(self) -> list[str]:
        return get_inventory(self.world, self.state)

    def reset(self) -> None:
        """Throw the current game away and start over."""
        with self._lock:
            self.state = new_game_state(self.world)
            self.history.clear()
        logger.info("game_reset")


class SessionStore:
    """In-memory GameSessions keyed by certificate fingerprint.

    At most ``max_sessions`` games are kept; the one idle longest is
    forgotten to make room for a new player.
    """

    def __init__(self, world: World, history_limit: int = 50, max_sessions: int = 1000):
        self.world = world
        self.history_limit = history_limit
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, GameSession] = OrderedDict()
        self._lock = Lock()

    def get(self, fingerprint: str) -> GameSession:
        """Return the player's session, creating it on first visit."""
        with self._lock:
            session = self._sessions.get(fingerprint)
            if session is not None:
                self._sessions.move_to_end(fingerprint)
                return session

            session = GameSession(self.world, self.history_limit)
            self._sessions[fingerprint] = session
            logger.info("session_created", fingerprint=fingerprint)
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("session_evicted", fingerprint=evicted)
            return session

    def __contains__(self, fingerprint: str) -> bool:
        return fingerprint in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
