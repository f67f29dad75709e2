"""Configuration for distance engines.

`EngineConfig` carries the bounds and caching policy an engine starts with.
It can be built from a plain mapping or from YAML:

    engine:
      max_distance: 25.0
      max_targets: 100
      cached: true
      weight_attr: cost
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

import yaml


@dataclass
class EngineConfig:
    """Initial settings for a `ShortestPathEngine`."""

    # Distances beyond this value are never computed
    max_distance: float = math.inf

    # Maximum number of settled nodes per source; None means unbounded
    max_targets: Optional[int] = None

    # Keep per-source state between queries
    cached: bool = True

    # Edge attribute used as weight when no weight function is given
    weight_attr: Optional[str] = None

    def __post_init__(self) -> None:
        self.max_distance = _parse_distance(self.max_distance)
        if self.max_targets is not None and (
            isinstance(self.max_targets, bool) or not isinstance(self.max_targets, int)
        ):
            raise ValueError(
                f"max_targets must be an integer or null, got {self.max_targets!r}"
            )
        if not isinstance(self.cached, bool):
            raise ValueError(f"cached must be a boolean, got {self.cached!r}")
        if self.weight_attr is not None and not isinstance(self.weight_attr, str):
            raise ValueError(
                f"weight_attr must be a string or null, got {self.weight_attr!r}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from a mapping, rejecting unknown keys.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(
                f"Unknown engine config key(s): {', '.join(sorted(map(str, unknown)))}"
            )
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if math.isinf(self.max_distance):
            data["max_distance"] = None
        return data


def _parse_distance(value: Any) -> float:
    # None and "inf" both mean unbounded
    if value is None:
        return math.inf
    if isinstance(value, bool):
        raise ValueError(f"max_distance must be a number, got {value!r}")
    if isinstance(value, str):
        if value.strip().lower() in ("inf", "infinity", ".inf"):
            return math.inf
        raise ValueError(f"max_distance must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"max_distance must be a number, got {value!r}") from exc
    if math.isnan(result):
        raise ValueError("max_distance must not be NaN")
    return result


def load_engine_config(yaml_str: str) -> EngineConfig:
    """Parse an engine config from a YAML string.

    The settings may sit at the top level or under an ``engine`` section.
    An empty document yields the defaults.

    Raises:
        ValueError: If the YAML does not describe a valid config mapping.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    if "engine" in data:
        extra = set(data) - {"engine"}
        if extra:
            raise ValueError(
                "Unexpected top-level key(s) next to 'engine': "
                + ", ".join(sorted(map(str, extra)))
            )
        data = data["engine"] or {}
        if not isinstance(data, dict):
            raise ValueError("'engine' must be a mapping")
    return EngineConfig.from_dict(data)


# Defaults used when an engine is built without explicit settings
DEFAULT_ENGINE_CONFIG = EngineConfig()
