# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from layerable.core.states import State
from tests.helpers import Cargo, declines, returns


@pytest.fixture
def cargo_cls():
    return Cargo


@pytest.fixture
def automata(cargo_cls):
    """A fresh Automata with Cargo as its cargo factory."""
    from layerable.runtime.automata import Automata

    return Automata(cargo_cls)


@pytest.fixture
def idle_system():
    """A system that settles in 'idle' and then declines every event."""
    return {
        "@start": State(returns("idle")),
        "idle": State(declines),
    }


@pytest.fixture
def observer():
    """A no-argument observer mock for contexts-changed notifications."""
    return MagicMock()


@pytest.fixture
def dummy_hooks():
    """A list of hook mocks for testing HookManager."""
    hook = MagicMock()
    hook.on_enter = MagicMock()
    hook.on_exit = MagicMock()
    hook.on_transition = MagicMock()
    hook.on_error = MagicMock()
    return [hook]


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from layerable.core.errors import (
        AutomataError,
        FinalizationError,
        StateNotFoundError,
        SystemNotFoundError,
        TransitionError,
        ValidationError,
    )

    return (
        AutomataError,
        FinalizationError,
        StateNotFoundError,
        SystemNotFoundError,
        TransitionError,
        ValidationError,
    )
