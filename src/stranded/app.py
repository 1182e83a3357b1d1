"""Xitzin application factory for Stranded."""

from importlib import resources
from pathlib import Path

from xitzin import Xitzin

from . import __version__
from .config import Config
from .engine.loader import load_world
from .logging import get_logger
from .session import SessionStore

logger = get_logger(__name__)


def _get_data_path() -> Path:
    """Locate world.json via importlib.resources (works when installed in a venv)."""
    return resources.files("stranded.data").joinpath("world.json")


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Stranded",
        version=__version__,
        templates_dir=templates_dir,
    )
    app.state.config = config

    @app.on_startup
    async def startup():
        """Load the game world and open the session store."""
        data_path = config.world_file or _get_data_path()
        world = load_world(data_path)
        app.state.world = world
        app.state.sessions = SessionStore(
            world, config.history_limit, config.max_sessions
        )
        logger.info(
            "world_loaded",
            locations=len(world.locations),
            items=len(world.items),
            start=world.start,
        )
        logger.info("startup_complete")

    from .routes import home, play

    home.register_routes(app)
    play.register_routes(app)

    return app
