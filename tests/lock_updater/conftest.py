"""Shared fixtures for lock updater tests."""

from __future__ import annotations

import pytest

from gradlelock.engines.lock_updater.models import SiblingModule


@pytest.fixture
def siblings() -> frozenset[SiblingModule]:
    return frozenset(
        {
            SiblingModule(group="com.acme", name="app"),
            SiblingModule(group="com.acme", name="core"),
            SiblingModule(group="com.acme", name="util"),
        }
    )
