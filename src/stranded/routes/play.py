"""Gameplay routes."""

from collections.abc import Iterator
from contextlib import contextmanager

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..logging import bound_player
from ..session import GameSession


@contextmanager
def _game_session(request: Request) -> Iterator[GameSession]:
    """Look up the player's in-memory game and tag log events with them."""
    identity = get_identity(request)
    with bound_player(identity.fingerprint):
        yield request.app.state.sessions.get(identity.fingerprint)


def _render_play(app: Xitzin, game: GameSession, message: str = "", is_error: bool = False):
    """Render the main play view."""
    return app.template(
        "play.gmi",
        room=game.get_room_name(),
        description=game.get_room_description(),
        exits=game.get_exits(),
        inventory=game.get_inventory(),
        history=list(game.history),
        message=message,
        is_error=is_error,
        game_over=game.state.game_over,
        won=game.state.won,
    )


def _run(app: Xitzin, game: GameSession, command: str):
    """Send one command through the engine and show the result."""
    result = game.process_command(command)
    if result is None:
        return _render_play(app, game)
    return _render_play(app, game, message=result.text, is_error=result.is_error)


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        with _game_session(request) as game:
            return _render_play(app, game)

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable link."""
        with _game_session(request) as game:
            return _run(app, game, f"go {direction}")

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        with _game_session(request) as game:
            return _run(app, game, query)

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        """Look around."""
        with _game_session(request) as game:
            return _run(app, game, "look")


def _register_info_routes(app: Xitzin) -> None:
    """Register inventory, status, and game management routes."""

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        """Show carried items."""
        with _game_session(request) as game:
            return _run(app, game, "inventory")

    @app.gemini("/status", name="status")
    @require_certificate
    def status(request: Request):
        """Show health and mission progress."""
        with _game_session(request) as game:
            return _run(app, game, "status")

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Reset game with confirmation."""
        with _game_session(request) as game:
            if query.strip().upper() == "YES":
                game.reset()
                return _render_play(
                    app, game, message="Your ship's emergency beacon blinks back on. A new game begins!",
                )
            return Redirect("/play")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_info_routes(app)
