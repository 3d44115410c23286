"""Fixtures for the staticserve examples.

Each example directory holds an ``app.py`` that builds a module-level
``app``. Tests get a freshly imported copy per test, because an App
freezes on first request and cannot be reconfigured afterwards.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

from staticserve.app import App


def load_example(directory: Path) -> ModuleType:
    """Execute ``directory/app.py`` as a new, unregistered module."""
    app_path = directory / "app.py"
    spec = importlib.util.spec_from_file_location(f"example_{directory.name}", app_path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load example from {app_path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_dir(request: pytest.FixtureRequest) -> Path:
    """Directory of the example the requesting test belongs to."""
    return Path(request.path).parent


@pytest.fixture
def example_app(example_dir: Path) -> App:
    return load_example(example_dir).app
