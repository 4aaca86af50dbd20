"""
Pytest configuration and fixtures for catalog-importer tests.

This module provides:
- An in-memory stand-in for the Kubernetes custom objects API
- Settings with pacing disabled
"""
from dataclasses import replace

import pytest

from catalog_importer.config.settings import Settings
from tests.helpers import FakeK8s


@pytest.fixture
def settings() -> Settings:
    """Default settings without the inter-upload delay."""
    return replace(Settings(), upload_delay=0.0)


@pytest.fixture
def fake_k8s() -> FakeK8s:
    return FakeK8s()
