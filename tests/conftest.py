"""Shared test fixtures for Stranded."""

import pytest

from stranded.app import _get_data_path, create_app
from stranded.config import Config
from stranded.engine.commands import handle_command
from stranded.engine.loader import load_world
from stranded.engine.state import GameState, new_game_state
from stranded.engine.world import World


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def state(world: World) -> GameState:
    return new_game_state(world)


@pytest.fixture
def play(world: World):
    """Run commands in order, returning the last result."""

    def _play(state: GameState, *commands: str):
        result = None
        for command in commands:
            result = handle_command(world, state, command)
            state = result.state
        return result

    return _play


@pytest.fixture
def test_config() -> Config:
    return Config(history_limit=10)


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")
