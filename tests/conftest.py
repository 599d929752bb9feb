import os
import uuid

import pytest

from rootfinder.core import resolver


@pytest.fixture
def project(tmp_path):
    """Project tree with an `etc` marker and a nested working directory."""
    root = tmp_path / "project"
    (root / "etc").mkdir(parents=True)
    nested = root / "src" / "pkg" / "module"
    nested.mkdir(parents=True)
    return root, nested


@pytest.fixture
def bare(tmp_path):
    """Nested tree without any marker directory."""
    nested = tmp_path / "bare" / "a" / "b"
    nested.mkdir(parents=True)
    return nested


@pytest.fixture
def marker():
    """Marker name that cannot exist anywhere on the host."""
    return f"rootfinder-{uuid.uuid4().hex}"


@pytest.fixture
def confined(tmp_path, monkeypatch):
    """Make the resolver blind to anything outside `tmp_path`.

    Most hosts have `/etc`, so an unconfined walk with the default
    markers always ends at `/`.
    """
    original = resolver.exists
    prefixes = (str(tmp_path), os.path.realpath(tmp_path))

    def exists(path):
        return str(path).startswith(prefixes) and original(path)

    monkeypatch.setattr(resolver, "exists", exists)
    return tmp_path
