"""Shape inference — RDF triples → SHACL NodeShape → Turtle.

The engine runs in four steps, each a plain function so they can be used
and tested on their own:

  1. expand              document → triples (delegated to a GraphExpander)
  2. analyze_properties  triples → {predicate: PropertyInfo}
  3. build_shape         infos → NodeShape
  4. serialize_shape     NodeShape → Turtle text

Mapping onto SHACL:
  every observed predicate   → sh:property [ sh:path <p> ; sh:minCount 1 ]
  literal values             → sh:nodeKind sh:Literal
  IRI or blank node values   → sh:nodeKind sh:IRI
  explicitly typed literals  → sh:datatype <dt>
  rdf:type                   → no property shape

Kind and datatype are resolved last-seen-wins per predicate, so a predicate
with both literal and IRI values is classified by whichever triple came
last in expansion order. Every shape is emitted under the same constant
subject IRI (SHAPE_IRI) regardless of what the document contains.
"""

from __future__ import annotations

from typing import Any, Iterable

from rdflib import BNode, Graph, Literal, RDF, URIRef, XSD
from rdflib.namespace import SH

from .config import get_settings
from .errors import ExpansionFailure, InferenceFailure, SerializationFailure
from .expansion import GraphExpander, PyLdExpander
from .logging import get_logger
from .types import NodeKind, NodeShape, PropertyInfo, PropertyShape, Triple

log = get_logger("inference")


SHAPE_IRI = URIRef("http://ld-shacl-bridge.org/shapes/NodeShape")

_NODE_KIND_TERMS = {
    NodeKind.RESOURCE: SH.IRI,
    NodeKind.LITERAL: SH.Literal,
}


# ---------------------------------------------------------------------------
# Step 2 — property analysis
# ---------------------------------------------------------------------------

def analyze_properties(triples: Iterable[Triple]) -> dict[URIRef, PropertyInfo]:
    """Accumulate a PropertyInfo per predicate, in first-seen order.

    rdf:type triples are skipped entirely.
    """
    properties: dict[URIRef, PropertyInfo] = {}
    for _subject, predicate, obj in triples:
        if predicate == RDF.type:
            continue
        properties.setdefault(predicate, PropertyInfo()).observe(obj)
    return properties


# ---------------------------------------------------------------------------
# Step 3 — shape construction
# ---------------------------------------------------------------------------

def build_shape(
    properties: dict[URIRef, PropertyInfo],
    shape_iri: URIRef | str = SHAPE_IRI,
    sort_predicates: bool = False,
) -> NodeShape:
    """Freeze analyzed properties into a NodeShape.

    With ``sort_predicates`` the property shapes are ordered by predicate IRI
    instead of the order the predicates were first seen in.
    """
    paths = sorted(properties, key=str) if sort_predicates else list(properties)
    return NodeShape(
        iri=URIRef(shape_iri),
        properties=tuple(PropertyShape.from_info(p, properties[p]) for p in paths),
    )


# ---------------------------------------------------------------------------
# Step 4 — SHACL graph and Turtle
# ---------------------------------------------------------------------------

def shape_to_graph(shape: NodeShape) -> Graph:
    """Translate a NodeShape into a SHACL shapes graph."""
    sg = Graph(bind_namespaces="none")
    sg.bind("sh", SH)
    sg.bind("xsd", XSD)
    sg.bind("rdf", RDF)

    sg.add((shape.iri, RDF.type, SH.NodeShape))

    # Serializer orders property nodes by label text
    width = len(str(max(len(shape.properties) - 1, 0)))
    for index, prop in enumerate(shape.properties):
        prop_shape = BNode(f"property_{index:0{width}d}")
        sg.add((shape.iri, SH.property, prop_shape))
        sg.add((prop_shape, SH.path, prop.path))
        sg.add((prop_shape, SH.minCount, Literal(prop.min_count)))

        if prop.datatype is not None:
            sg.add((prop_shape, SH.datatype, prop.datatype))

        kind = _NODE_KIND_TERMS.get(prop.node_kind)
        if kind is not None:
            sg.add((prop_shape, SH.nodeKind, kind))

    return sg


def serialize_shape(shape: NodeShape) -> str:
    """Render a NodeShape as Turtle."""
    try:
        return shape_to_graph(shape).serialize(format="turtle")
    except Exception as exc:
        log.error("serialization_failed", shape=str(shape.iri), error=str(exc))
        raise SerializationFailure(f"could not serialize shape {shape.iri}: {exc}") from exc


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class ShapeGenerator:
    """Infers SHACL shapes from JSON-LD documents.

    Holds no per-document state, so one instance can serve concurrent calls.
    Unset options fall back to the current settings.
    """

    def __init__(
        self,
        expander: GraphExpander | None = None,
        shape_iri: URIRef | str | None = None,
        sort_predicates: bool | None = None,
    ):
        settings = get_settings()
        self.expander = expander if expander is not None else PyLdExpander()
        self.shape_iri = URIRef(shape_iri if shape_iri is not None else settings.shape_iri)
        self.sort_predicates = (
            sort_predicates if sort_predicates is not None else settings.sort_predicates
        )

    def infer(self, document: dict[str, Any]) -> NodeShape:
        """Expand ``document`` and build its NodeShape."""
        try:
            triples = self.expander.expand(document)
        except InferenceFailure:
            raise
        except (TypeError, ValueError, KeyError) as exc:
            raise ExpansionFailure(f"could not expand document: {exc}") from exc

        shape = build_shape(
            analyze_properties(triples),
            shape_iri=self.shape_iri,
            sort_predicates=self.sort_predicates,
        )
        log.debug("shape_built", shape=str(shape.iri), properties=len(shape))
        return shape

    def generate(self, document: dict[str, Any]) -> str:
        """Expand ``document`` and return its shape as Turtle."""
        return serialize_shape(self.infer(document))


def generate(document: dict[str, Any], expander: GraphExpander | None = None) -> str:
    """Infer the SHACL shape of ``document`` and return it as Turtle."""
    return ShapeGenerator(expander=expander).generate(document)
