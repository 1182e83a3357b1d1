"""Home, help, and about routes."""

from xitzin import Request, Xitzin

from .. import __version__
from ..engine.commands import HELP_TEXT

BANNER = f"""STRANDED v{__version__}
Type 'help' to see available commands."""


def register_routes(app: Xitzin) -> None:
    """Register pages that need no client certificate."""

    @app.gemini("/", name="home")
    def home(request: Request):
        return app.template("home.gmi", banner=BANNER)

    @app.gemini("/help", name="help")
    def help_page(request: Request):
        return app.template("help.gmi", commands=HELP_TEXT)

    @app.gemini("/about", name="about")
    def about(request: Request):
        return app.template("about.gmi")
