"""
Shared test fixtures and helpers for the Passer test suite.
"""

import io

import pytest

from passer.app import App
from passer.config import DispatchConfig
from passer.controller import ControllerRegistry
from passer.routing import StaticRouteResolver


SAMPLE_PACKAGE = "passer_sample.controllers"


class RecordingRenderer:
    """Renderer that records the order of calls made by the dispatcher."""

    def __init__(self):
        self.calls = []
        self.cors = None
        self.data = None

    def set_cors(self, policy):
        self.calls.append("set_cors")
        self.cors = policy

    def set_data(self, data):
        self.calls.append("set_data")
        self.data = data

    def run(self):
        self.calls.append("run")


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def registry():
    return ControllerRegistry()


@pytest.fixture
def sample_config():
    return DispatchConfig(controllers_package=SAMPLE_PACKAGE)


@pytest.fixture
def make_app(renderer, sample_config):
    """Build an App dispatching a single fixed route."""

    def _make(callback=None, params=None, **kwargs):
        kwargs.setdefault("config", sample_config)
        return App(StaticRouteResolver(callback, params), renderer, **kwargs)

    return _make
