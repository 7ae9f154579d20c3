"""Serializable description of a nodal analysis problem."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _uint(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{what} must be a non-negative integer, got {value!r}")
    return value


def _floats(value: Any, what: str) -> list[float]:
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list of numbers, got {value!r}")
    result = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise ValueError(f"{what} must be a list of numbers, got {value!r}")
        result.append(float(item))
    return result


def _require(data: Any, key: str, what: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{what} is missing field {key!r}") from None


@dataclass
class NodalAnalysisElement:
    """An element of a model: its type, the nodes it joins and its gain."""

    element_type: str
    input: int
    output: int
    gain: list[float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "element_type": self.element_type,
            "input": self.input,
            "output": self.output,
            "gain": list(self.gain),
        }

    @classmethod
    def from_dict(cls, data: Any) -> NodalAnalysisElement:
        element_type = _require(data, "element_type", "element")
        if not isinstance(element_type, str):
            raise ValueError(f"element_type must be a string, got {element_type!r}")
        return cls(
            element_type=element_type,
            input=_uint(_require(data, "input", "element"), "input"),
            output=_uint(_require(data, "output", "element"), "output"),
            gain=_floats(_require(data, "gain", "element"), "gain"),
        )


@dataclass
class NodalMetadata:
    """Initial state of a node: its potential, whether it is locked, extra data."""

    potential: list[float]
    is_locked: bool = False
    metadata: dict[str, float] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "potential": list(self.potential),
            "is_locked": self.is_locked,
            "metadata": None if self.metadata is None else dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Any) -> NodalMetadata:
        is_locked = _require(data, "is_locked", "node configuration")
        if not isinstance(is_locked, bool):
            raise ValueError(f"is_locked must be a boolean, got {is_locked!r}")
        raw_meta = data.get("metadata")
        metadata: dict[str, float] | None = None
        if raw_meta is not None:
            if not isinstance(raw_meta, Mapping):
                raise ValueError(f"metadata must be an object, got {raw_meta!r}")
            metadata = {}
            for key, value in raw_meta.items():
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"metadata value for {key!r} must be a number")
                metadata[str(key)] = float(value)
        return cls(
            potential=_floats(
                _require(data, "potential", "node configuration"), "potential"
            ),
            is_locked=is_locked,
            metadata=metadata,
        )


@dataclass
class NodalAnalysisModel:
    """A whole nodal analysis problem."""

    model_type: str
    nodes: int = 0
    configuration: dict[int, NodalMetadata] = field(default_factory=dict)
    elements: list[NodalAnalysisElement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dict; configuration keys become strings."""
        return {
            "model_type": self.model_type,
            "nodes": self.nodes,
            "configuration": {
                str(index): meta.to_dict() for index, meta in self.configuration.items()
            },
            "elements": [elem.to_dict() for elem in self.elements],
        }

    @classmethod
    def from_dict(cls, data: Any) -> NodalAnalysisModel:
        """Build a model from a dict as produced by ``to_dict``."""
        model_type = _require(data, "model_type", "model")
        if not isinstance(model_type, str):
            raise ValueError(f"model_type must be a string, got {model_type!r}")
        raw_config = _require(data, "configuration", "model")
        if not isinstance(raw_config, Mapping):
            raise ValueError("configuration must be an object")
        configuration = {}
        for key, meta in raw_config.items():
            try:
                index = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"configuration key {key!r} is not a node index") from None
            configuration[_uint(index, "configuration key")] = NodalMetadata.from_dict(meta)
        raw_elements = _require(data, "elements", "model")
        if not isinstance(raw_elements, list):
            raise ValueError("elements must be a list")
        return cls(
            model_type=model_type,
            nodes=_uint(_require(data, "nodes", "model"), "nodes"),
            configuration=configuration,
            elements=[NodalAnalysisElement.from_dict(e) for e in raw_elements],
        )

    def to_json(self) -> str:
        """Serialize the model as indented JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> NodalAnalysisModel:
        """Parse a model from JSON text; raises ``ValueError`` if it is malformed."""
        return cls.from_dict(json.loads(text))