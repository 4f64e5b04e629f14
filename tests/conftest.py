"""Shared fixtures: offline context loading and fresh settings per test."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import Graph, URIRef
from rdflib.namespace import SH

from ldshacl.config import reset_settings
from ldshacl.expansion import ContextLoader, PyLdExpander
from ldshacl.inference import SHAPE_IRI, ShapeGenerator


SCHEMA = "https://schema.org/"
SCHEMA_CONTEXT = {"@vocab": "https://schema.org/"}


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("LDSHACL_SHAPE_IRI", "LDSHACL_SORT_PREDICATES",
                 "LDSHACL_ALLOW_REMOTE_CONTEXTS", "LDSHACL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def loader() -> ContextLoader:
    """Context loader that knows schema.org and never touches the network."""
    return ContextLoader({SCHEMA: SCHEMA_CONTEXT}, allow_remote=False)


@pytest.fixture
def expander(loader) -> PyLdExpander:
    return PyLdExpander(loader)


@pytest.fixture
def generator(expander) -> ShapeGenerator:
    return ShapeGenerator(expander=expander)


def parse_shape(text: str) -> Graph:
    return Graph().parse(data=text, format="turtle")


def property_nodes(graph: Graph, shape: URIRef = SHAPE_IRI) -> dict:
    """Map sh:path → property shape node for every sh:property of ``shape``."""
    return {graph.value(node, SH.path): node for node in graph.objects(shape, SH.property)}
