"""Core types for the bridge.

Records enter as schemaless JSON and are classified into a tagged union
(JsonValue) before anything inspects them. Triples come out of graph
expansion as rdflib terms. Shape inference accumulates one PropertyInfo per
predicate and freezes the result into a NodeShape of PropertyShapes.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from rdflib import BNode, Literal, URIRef

from .errors import InvalidInput


# ---------------------------------------------------------------------------
# JsonValue — tagged union over JSON-like input
# ---------------------------------------------------------------------------

class JsonKind(Enum):
    """The six shapes a JSON value can take."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class JsonValue:
    """A classified JSON value.

    ``value`` keeps the original Python object; ``kind`` says which branch of
    the union it belongs to, so callers can dispatch on ``kind`` instead of
    probing the object with isinstance checks of their own.
    """
    kind: JsonKind
    value: Any = field(compare=False)

    @classmethod
    def from_python(cls, obj: Any) -> JsonValue:
        """Classify ``obj``, checking every nested value.

        Raises InvalidInput for anything without a JSON rendition.
        """
        cls._check(obj, "$")
        return cls(_kind_of(obj), obj)

    @staticmethod
    def _check(obj: Any, where: str) -> None:
        kind = _kind_of(obj, where)
        if kind is JsonKind.MAPPING:
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise InvalidInput(f"{where}: mapping key {key!r} is not a string")
                JsonValue._check(item, f"{where}.{key}")
        elif kind is JsonKind.SEQUENCE:
            for i, item in enumerate(obj):
                JsonValue._check(item, f"{where}[{i}]")

    @property
    def is_mapping(self) -> bool:
        return self.kind is JsonKind.MAPPING

    def to_python(self) -> Any:
        """Return a deep copy of the wrapped value."""
        return copy.deepcopy(self.value)


def _kind_of(obj: Any, where: str = "$") -> JsonKind:
    # bool before number: bool is an int subclass
    if obj is None:
        return JsonKind.NULL
    if isinstance(obj, bool):
        return JsonKind.BOOLEAN
    if isinstance(obj, (int, float)):
        if isinstance(obj, float) and not math.isfinite(obj):
            raise InvalidInput(f"{where}: {obj!r} has no JSON representation")
        return JsonKind.NUMBER
    if isinstance(obj, str):
        return JsonKind.STRING
    if isinstance(obj, dict):
        return JsonKind.MAPPING
    if isinstance(obj, (list, tuple)):
        return JsonKind.SEQUENCE
    raise InvalidInput(f"{where}: {type(obj).__name__} is not a JSON value")


# ---------------------------------------------------------------------------
# Triple — produced by graph expansion, never mutated
# ---------------------------------------------------------------------------

Subject = Union[URIRef, BNode]
Object = Union[URIRef, BNode, Literal]
Triple = tuple[Subject, URIRef, Object]


# ---------------------------------------------------------------------------
# NodeKind — value kind observed for a predicate
# ---------------------------------------------------------------------------

class NodeKind(Enum):
    """Kind of value a predicate points at."""
    RESOURCE = "resource"
    LITERAL = "literal"
    UNSET = "unset"


# ---------------------------------------------------------------------------
# PropertyInfo — per-predicate accumulator
# ---------------------------------------------------------------------------

@dataclass
class PropertyInfo:
    """What has been observed so far for one predicate.

    Classification is last-seen-wins: every observation overwrites the kind,
    and every literal overwrites the datatype (an untyped literal clears it).
    A resource object leaves a previously recorded datatype in place.
    """
    node_kind: NodeKind = NodeKind.UNSET
    datatype: URIRef | None = None

    def observe(self, obj: Object) -> None:
        if isinstance(obj, Literal):
            self.node_kind = NodeKind.LITERAL
            self.datatype = URIRef(obj.datatype) if obj.datatype is not None else None
        else:
            # IRIs and blank nodes alike
            self.node_kind = NodeKind.RESOURCE


# ---------------------------------------------------------------------------
# PropertyShape / NodeShape — the inferred constraint description
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PropertyShape:
    """One property constraint inside a NodeShape."""
    path: URIRef
    min_count: int = 1
    datatype: URIRef | None = None
    node_kind: NodeKind = NodeKind.UNSET

    @classmethod
    def from_info(cls, path: URIRef, info: PropertyInfo) -> PropertyShape:
        return cls(path=path, datatype=info.datatype, node_kind=info.node_kind)

    def __repr__(self) -> str:
        dt = f", {self.datatype}" if self.datatype is not None else ""
        return f"PropertyShape({self.path} [{self.node_kind.value}{dt}])"


@dataclass(frozen=True)
class NodeShape:
    """A named set of property constraints, in construction order."""
    iri: URIRef
    properties: tuple[PropertyShape, ...] = ()

    def paths(self) -> list[URIRef]:
        return [prop.path for prop in self.properties]

    def __len__(self) -> int:
        return len(self.properties)
