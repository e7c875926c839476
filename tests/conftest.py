"""Pytest fixtures for reticle generator tests."""

import os
import tempfile

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Default reticle configuration (256px canvas, four diagonal spokes)."""
    from reticlegen.models import ReticleConfig
    return ReticleConfig()


@pytest.fixture
def razor_config():
    """Default configuration with a zero tip width."""
    from reticlegen.models import ReticleConfig
    return ReticleConfig(spoke_tip_width=0.0)


@pytest.fixture
def sample_csv(temp_dir):
    """Write a header plus two valid color-pair rows."""
    path = os.path.join(temp_dir, "pairs.csv")
    with open(path, "w", encoding="utf-8") as f:
        f.write("outer,inner\nFF0000,00FF00\n0000FF,FFFFFF\n")
    return path


@pytest.fixture
def write_csv(temp_dir):
    """Factory writing custom CSV content into the temp directory."""
    def _write(text, name="pairs.csv"):
        path = os.path.join(temp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path
    return _write
