import os
from email.message import Message
from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import pytest

from license_bundle.models.schemas import PackageRecord
from license_bundle.services.licenses.model import LicenseKind

"""
Shared helpers for tests:
- `text_table` fixture: small injected license texts, so report tests do not
  depend on the bundled files.
- `FakeDistribution` and the `installed` fixture: an in-memory replacement for
  `importlib.metadata.distribution` used by the resolver.
- `demo_manifest` fixture: a `pyproject.toml` for a root package "demo".
"""


# Sets dummy environment variables to avoid picking up a developer's .env
@pytest.fixture(scope="session", autouse=True)
def mock_env_vars():
    with patch.dict(os.environ, {
        "LICENSE_BUNDLE_LOG_LEVEL": "WARNING",
        "LICENSE_BUNDLE_MANIFEST": "pyproject.toml",
    }):
        yield


@pytest.fixture
def text_table():
    """Injected license texts: MIT and Apache-2.0 only."""
    return {
        LicenseKind.MIT: "MIT License\n\nPermission is hereby granted.",
        LicenseKind.APACHE_2_0: "Apache License\nVersion 2.0",
    }


@pytest.fixture
def make_record():
    def _make(name, license_text="", version="1.0.0", license_file=None):
        return PackageRecord(
            name=name,
            version=version,
            license_text=license_text,
            license_file=license_file,
        )
    return _make


class FakeDistribution:
    """Minimal stand-in for `importlib.metadata.Distribution`."""

    def __init__(self, name, version="1.0.0", requires=None, **fields):
        self.metadata = Message()
        self.metadata["Name"] = name
        for key, value in fields.items():
            header = key.replace("_", "-")
            values = value if isinstance(value, list) else [value]
            for item in values:
                self.metadata[header] = item
        self.version = version
        self.requires = requires


@pytest.fixture
def FakeDist():
    return FakeDistribution


@pytest.fixture
def installed(monkeypatch):
    """
    Replaces the resolver's distribution lookup with an in-memory registry.

    Returns a dict (lower-cased name -> FakeDistribution) that tests fill in.
    """
    registry = {}

    def _distribution(name):
        try:
            return registry[name.lower().replace("_", "-")]
        except KeyError:
            raise PackageNotFoundError(name) from None

    monkeypatch.setattr("license_bundle.services.resolver.load.distribution", _distribution)
    return registry


@pytest.fixture
def demo_manifest(tmp_path):
    """A manifest for root package "demo" depending on a, b and c."""
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text(
        '[project]\n'
        'name = "demo"\n'
        'version = "0.3.0"\n'
        'license = "MIT"\n'
        'dependencies = ["a>=1.0", "b", "c; python_version >= \'3\'"]\n',
        encoding="utf-8",
    )
    return manifest


@pytest.fixture
def demo_installed(installed):
    """Installs A (MIT), B (Apache-2.0) and C (no license) into the fake registry."""
    installed["a"] = FakeDistribution("a", License="MIT")
    installed["b"] = FakeDistribution("b", License_Expression="Apache-2.0")
    installed["c"] = FakeDistribution("c")
    return installed
