# tests/unit/core/test_config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import dataclasses

import pytest

from layerable.config import DEFAULT_POLL_INTERVAL, AutomataConfig
from layerable.core.errors import ValidationError


def test_defaults():
    config = AutomataConfig()
    assert config.poll_interval == DEFAULT_POLL_INTERVAL
    assert config.announce_transitions is False


def test_from_mapping():
    config = AutomataConfig.from_mapping({"poll_interval": 0.5, "announce_transitions": True})
    assert config == AutomataConfig(poll_interval=0.5, announce_transitions=True)


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValidationError, match="interval_ms"):
        AutomataConfig.from_mapping({"interval_ms": 30})


@pytest.mark.parametrize("interval", [-1, "fast", True])
def test_invalid_interval(interval):
    with pytest.raises(ValidationError):
        AutomataConfig(poll_interval=interval)


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        AutomataConfig().poll_interval = 1.0
