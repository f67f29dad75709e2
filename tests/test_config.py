"""Tests for `spdist.config` focusing on behavior and correctness."""

import math

import pytest

from spdist.config import DEFAULT_ENGINE_CONFIG, EngineConfig, load_engine_config


def test_defaults() -> None:
    config = EngineConfig()
    assert config.max_distance == math.inf
    assert config.max_targets is None
    assert config.cached is True
    assert config.weight_attr is None
    assert DEFAULT_ENGINE_CONFIG == config


@pytest.mark.parametrize("value", [None, "inf", "Infinity", float("inf")])
def test_unbounded_distance_spellings(value) -> None:
    assert EngineConfig(max_distance=value).max_distance == math.inf


def test_numeric_distance_is_float() -> None:
    config = EngineConfig(max_distance=3)
    assert config.max_distance == 3.0
    assert isinstance(config.max_distance, float)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_distance": "far"},
        {"max_distance": True},
        {"max_distance": float("nan")},
        {"max_targets": 2.5},
        {"max_targets": True},
        {"cached": "yes"},
        {"weight_attr": 3},
    ],
)
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="Unknown engine config key"):
        EngineConfig.from_dict({"max_distance": 1, "max_dist": 2})


def test_to_dict_round_trips_through_from_dict() -> None:
    config = EngineConfig(max_targets=5, cached=False, weight_attr="cost")
    data = config.to_dict()
    assert data == {
        "max_distance": None,
        "max_targets": 5,
        "cached": False,
        "weight_attr": "cost",
    }
    assert EngineConfig.from_dict(data) == config


def test_load_engine_config_section() -> None:
    config = load_engine_config(
        """
engine:
  max_distance: 25.5
  max_targets: 100
  cached: false
  weight_attr: cost
"""
    )
    assert config == EngineConfig(
        max_distance=25.5, max_targets=100, cached=False, weight_attr="cost"
    )


def test_load_engine_config_top_level_and_yaml_inf() -> None:
    config = load_engine_config("max_distance: .inf\nmax_targets: 3\n")
    assert config.max_distance == math.inf
    assert config.max_targets == 3


@pytest.mark.parametrize("text", ["", "engine:\n", "engine: {}\n"])
def test_load_engine_config_empty(text) -> None:
    assert load_engine_config(text) == EngineConfig()


@pytest.mark.parametrize(
    "text,match",
    [
        ("- 1\n- 2\n", "dictionary at top-level"),
        ("engine: [1, 2]\n", "must be a mapping"),
        ("engine: {}\nother: 1\n", "Unexpected top-level"),
        ("engine:\n  bogus: 1\n", "Unknown engine config key"),
    ],
)
def test_load_engine_config_errors(text, match) -> None:
    with pytest.raises(ValueError, match=match):
        load_engine_config(text)
