"""Pytest configuration and shared fixtures."""

import logging

import logfire
import pytest


logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_test_logfire():
    """Keep Logfire local for the whole test session."""
    logfire.configure(send_to_logfire=False, console=False)
