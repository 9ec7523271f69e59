"""Pytest configuration and shared fixtures."""

import os
import sys
from unittest.mock import MagicMock

import pytest
from rasterio.transform import from_origin

# Project root on the path so `import config` works
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))


@pytest.fixture
def mock_ee() -> MagicMock:
    """Stand-in for the `ee` module; records every call made against it."""
    return MagicMock(name="ee")


@pytest.fixture
def aoi() -> MagicMock:
    return MagicMock(name="aoi")


@pytest.fixture
def utm_transform():
    """North-up 30 m grid, origin (0, 150)."""
    return from_origin(0.0, 150.0, 30.0, 30.0)
