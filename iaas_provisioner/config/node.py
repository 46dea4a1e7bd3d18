"""Typed view over raw configuration values.

Configuration files produce heterogeneous values (strings, numbers,
booleans, nested mappings, lists). ``ConfigNode`` tags every value with its
kind and offers typed accessors that fail with a ``ConfigTypeError`` naming
the key, instead of coercing silently.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple, Union

from iaas_provisioner.domain.base.exceptions import ConfigTypeError

Scalar = Union[str, int, float, bool]


class NodeKind(str, Enum):
    """Kinds of configuration values."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NULL = "null"


def _kind_of(value: Any) -> NodeKind:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, int):
        return NodeKind.INTEGER
    if isinstance(value, float):
        return NodeKind.FLOAT
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, dict):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    if value is None:
        return NodeKind.NULL
    raise TypeError(f"unsupported configuration value type: {type(value).__name__}")


class ConfigNode:
    """A configuration value together with the key it was read from."""

    __slots__ = ("key", "kind", "_value")

    def __init__(self, key: str, value: Any):
        self.key = key
        self.kind = _kind_of(value)
        self._value = value

    def __repr__(self) -> str:
        return f"ConfigNode({self.key!r}, {self.kind.value}={self._value!r})"

    @property
    def raw(self) -> Any:
        return self._value

    @property
    def is_scalar(self) -> bool:
        return self.kind in (NodeKind.STRING, NodeKind.INTEGER, NodeKind.FLOAT, NodeKind.BOOLEAN)

    def _expect(self, *kinds: NodeKind) -> None:
        if self.kind not in kinds:
            raise ConfigTypeError(
                self.key, " or ".join(k.value for k in kinds), self.kind.value
            )

    def as_string(self) -> str:
        self._expect(NodeKind.STRING)
        return self._value

    def as_int(self) -> int:
        self._expect(NodeKind.INTEGER)
        return self._value

    def as_float(self) -> float:
        self._expect(NodeKind.INTEGER, NodeKind.FLOAT)
        return float(self._value)

    def as_bool(self) -> bool:
        self._expect(NodeKind.BOOLEAN)
        return self._value

    def as_scalar(self) -> Scalar:
        if not self.is_scalar:
            raise ConfigTypeError(self.key, "scalar", self.kind.value)
        return self._value

    def as_list(self) -> List[ConfigNode]:
        self._expect(NodeKind.SEQUENCE)
        return [ConfigNode(f"{self.key}[{i}]", v) for i, v in enumerate(self._value)]

    def as_mapping(self) -> Dict[str, ConfigNode]:
        """Return child nodes; every key must be a string."""
        self._expect(NodeKind.MAPPING)
        children = {}
        for k, v in self._value.items():
            if not isinstance(k, str):
                raise ConfigTypeError(f"{self.key}:{k}", "string key", type(k).__name__)
            children[k] = ConfigNode(f"{self.key}:{k}", v)
        return children

    def string_items(self) -> Iterator[Tuple[str, ConfigNode]]:
        """Iterate over string-keyed children, skipping any other key type."""
        self._expect(NodeKind.MAPPING)
        for k, v in self._value.items():
            if isinstance(k, str):
                yield k, ConfigNode(f"{self.key}:{k}", v)

    def non_string_keys(self) -> List[Any]:
        self._expect(NodeKind.MAPPING)
        return [k for k in self._value if not isinstance(k, str)]
