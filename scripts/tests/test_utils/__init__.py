"""Test utilities package."""

from .town_environment import (
    DEFAULT_ROUTES,
    FAKE_BD_COMMAND,
    GASTOWN_RIG_PATH,
    TEST_RIG_PATH,
    TestTownEnvironment,
)

__all__ = [
    "DEFAULT_ROUTES",
    "FAKE_BD_COMMAND",
    "GASTOWN_RIG_PATH",
    "TEST_RIG_PATH",
    "TestTownEnvironment",
]
