"""Shared test fixtures for all eee tests."""

import pytest

from eee import Emitter, RegistrationCounter


@pytest.fixture
def emitter() -> Emitter:
    """Emitter with its own registration counter."""
    return Emitter(counter=RegistrationCounter())


@pytest.fixture
def calls() -> list:
    """Shared log that recording hooks append to."""
    return []


@pytest.fixture
def recorder(calls):
    """Factory for sync hooks that append their tag to ``calls``."""

    def make(tag, *, stop=False, value=None):
        def hook(event, payload):
            calls.append(tag)
            if stop:
                event.stop()
            return value

        hook.__qualname__ = f"hook_{tag}"
        return hook

    return make
