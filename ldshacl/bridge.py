"""Conversion pipeline: record → JSON-LD document → SHACL shape.

This is the sequence every conversion request goes through: lift the record
with the caller's context, then infer a shape from the lifted document.
Storing results, issuing identifiers and answering HTTP requests are left to
the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rdflib import Graph

from .inference import ShapeGenerator, serialize_shape, shape_to_graph
from .lifter import lift
from .logging import get_logger
from .types import NodeShape

log = get_logger("bridge")


@dataclass
class ConversionResult:
    """A lifted document together with the shape inferred from it."""
    document: dict[str, Any]
    shape: NodeShape
    shape_text: str

    def summary(self) -> str:
        lines = [f"NodeShape <{self.shape.iri}>", "-" * 50]
        if self.shape.properties:
            lines.append(f"  Properties ({len(self.shape)}):")
            for prop in self.shape.properties:
                dt = f" {prop.datatype}" if prop.datatype is not None else ""
                lines.append(f"    - {prop.path} [{prop.node_kind.value}{dt}] min {prop.min_count}")
        else:
            lines.append("  No properties.")
        return "\n".join(lines)

    def shape_graph(self) -> Graph:
        """The shape as an rdflib shapes graph."""
        return shape_to_graph(self.shape)


def convert(
    record: Any,
    context: Any,
    generator: ShapeGenerator | None = None,
) -> ConversionResult:
    """Lift ``record`` with ``context`` and infer its shape.

    Raises InvalidInput for a bad record and InferenceFailure when the lifted
    document cannot be expanded. Nothing is returned on failure.
    """
    generator = generator if generator is not None else ShapeGenerator()
    document = lift(record, context)
    shape = generator.infer(document)
    result = ConversionResult(
        document=document,
        shape=shape,
        shape_text=serialize_shape(shape),
    )
    log.info("converted", properties=len(shape))
    return result
