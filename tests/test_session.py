"""Tests for in-memory game sessions."""

import threading

from stranded.engine.state import GameState
from stranded.engine.world import World
from stranded.session import GameSession, HistoryEntry, SessionStore


def test_process_command_applies_state(world: World):
    game = GameSession(world)
    result = game.process_command("  north ")
    assert result is not None
    assert game.state.location == "crashSite"
    assert game.get_room_name() == "Crash Site"
    assert game.history[-1] == HistoryEntry("north", result.text, False)


def test_blank_input_is_ignored(world: World):
    game = GameSession(world)
    assert game.process_command("   ") is None
    assert not game.history
    assert game.state == GameState()


def test_errors_are_recorded(world: World):
    game = GameSession(world)
    game.process_command("dance")
    assert game.history[-1].is_error
    assert game.state == GameState()


def test_clear_empties_history(world: World):
    game = GameSession(world)
    game.process_command("look")
    game.process_command("north")
    game.process_command("clear")
    assert not game.history
    assert game.state.location == "crashSite"


def test_history_is_bounded(world: World):
    game = GameSession(world, history_limit=3)
    for _ in range(5):
        game.process_command("look")
    assert len(game.history) == 3


def test_views(world: World):
    game = GameSession(world)
    assert game.get_visible_items() == ["Repair Kit"]
    assert game.get_exits() == {"north": "Crash Site"}
    game.process_command("take repair kit")
    assert game.get_visible_items() == []
    assert game.get_inventory() == ["Repair Kit"]
    assert game.get_room_description().startswith("You are in the command center")


def test_reset(world: World):
    game = GameSession(world)
    game.process_command("take repair kit")
    game.process_command("north")
    game.reset()
    assert game.state == GameState()
    assert not game.history


def test_store_keeps_one_session_per_player(world: World):
    store = SessionStore(world)
    first = store.get("alice")
    assert store.get("alice") is first
    assert store.get("bob") is not first
    assert len(store) == 2


def test_sessions_do_not_share_drops(world: World):
    """Dropping an item in one game leaves other games untouched."""
    store = SessionStore(world)
    alice = store.get("alice")
    bob = store.get("bob")
    for command in ("take repair kit", "north", "drop repair kit"):
        alice.process_command(command)

    assert "Repair Kit" in alice.process_command("look").text
    assert bob.get_visible_items() == ["Repair Kit"]
    assert bob.process_command("take repair kit").state.inventory == ("repairKit",)


def test_commands_wait_for_the_running_one(world: World):
    """A second command on the same game waits until the first is applied."""
    game = GameSession(world)
    game._lock.acquire()
    worker = threading.Thread(target=game.process_command, args=("north",))
    worker.start()
    worker.join(timeout=0.2)
    assert worker.is_alive()
    assert game.state.location == "ship"

    game._lock.release()
    worker.join(timeout=5)
    assert not worker.is_alive()
    assert game.state.location == "crashSite"


def test_concurrent_commands_are_all_applied(world: World):
    """Moves from two threads on one game are never lost."""
    game = GameSession(world, history_limit=1000)
    rounds = 100

    def walk(first: str, second: str):
        for _ in range(rounds):
            game.process_command(first)
            game.process_command(second)

    threads = [
        threading.Thread(target=walk, args=("look", "status")),
        threading.Thread(target=walk, args=("inventory", "look")),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(game.history) == 4 * rounds
    assert game.state == GameState()


def test_concurrent_takes_keep_one_copy(world: World):
    """Two players racing on one certificate cannot pick the kit up twice."""
    game = GameSession(world)
    threads = [
        threading.Thread(target=game.process_command, args=("take repair kit",))
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert game.state.inventory == ("repairKit",)
    assert sum(not entry.is_error for entry in game.history) == 1


def test_store_never_exceeds_cap(world: World):
    store = SessionStore(world, max_sessions=3)
    for n in range(10):
        store.get(f"player-{n}")
        assert len(store) <= 3
    assert len(store) == 3
    assert "player-9" in store
    assert "player-0" not in store


def test_store_evicts_least_recently_used(world: World):
    store = SessionStore(world, max_sessions=2)
    alice = store.get("alice")
    store.get("bob")
    assert store.get("alice") is alice
    store.get("carol")

    assert "alice" in store
    assert "carol" in store
    assert "bob" not in store


def test_evicted_player_starts_over(world: World):
    store = SessionStore(world, max_sessions=1)
    store.get("alice").process_command("north")
    store.get("bob")
    assert store.get("alice").state == GameState()
