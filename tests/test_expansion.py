"""Tests for JSON-LD → RDF expansion through PyLD."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from pyld import jsonld
from rdflib import BNode, Literal, RDF, URIRef, XSD

from ldshacl.errors import ExpansionFailure, InferenceFailure
from ldshacl.expansion import ContextLoader, PyLdExpander, to_graph


SDO = "https://schema.org/"
EX = "https://example.org/"


# ---------------------------------------------------------------------------
# ContextLoader
# ---------------------------------------------------------------------------

class TestContextLoader:
    def test_serves_registered_context(self):
        loader = ContextLoader(allow_remote=False)
        loader.register("https://ctx.example.org/a", {"@context": {"@vocab": SDO}})

        remote = loader("https://ctx.example.org/a")
        assert remote["documentUrl"] == "https://ctx.example.org/a"
        assert remote["document"] == {"@context": {"@vocab": SDO}}

    def test_wraps_bare_context(self):
        loader = ContextLoader({"https://ctx.example.org/b": {"@vocab": SDO}}, allow_remote=False)
        assert loader("https://ctx.example.org/b")["document"] == {"@context": {"@vocab": SDO}}
        assert "https://ctx.example.org/b" in loader

    def test_unknown_url_without_remote_fails(self):
        loader = ContextLoader(allow_remote=False)
        with pytest.raises(jsonld.JsonLdError):
            loader("https://ctx.example.org/unknown")

    def test_remote_default_follows_settings(self, monkeypatch):
        from ldshacl.config import reset_settings

        monkeypatch.setenv("LDSHACL_ALLOW_REMOTE_CONTEXTS", "false")
        reset_settings()
        assert ContextLoader().allow_remote is False


# ---------------------------------------------------------------------------
# PyLdExpander
# ---------------------------------------------------------------------------

class TestPyLdExpander:
    def test_plain_strings_become_simple_literals(self, expander):
        triples = expander.expand({"@context": SDO, "name": "John Doe"})
        assert len(triples) == 1
        subject, predicate, obj = triples[0]
        assert isinstance(subject, BNode)
        assert predicate == URIRef(SDO + "name")
        assert obj == Literal("John Doe")
        assert obj.datatype is None

    def test_numbers_are_typed(self, expander):
        triples = expander.expand({"@context": SDO, "age": 30})
        assert triples[0][2].datatype == XSD.integer

    def test_booleans_are_typed(self, expander):
        triples = expander.expand({"@context": SDO, "active": True})
        assert triples[0][2].datatype == XSD.boolean

    def test_language_tag_kept(self, expander):
        doc = {"@context": SDO, "name": {"@value": "Jean", "@language": "fr"}}
        obj = expander.expand(doc)[0][2]
        assert obj.language == "fr"
        assert obj.datatype is None

    def test_iri_objects(self, expander):
        doc = {"@context": SDO, "@id": EX + "alice", "knows": {"@id": EX + "bob"}}
        assert expander.expand(doc) == [
            (URIRef(EX + "alice"), URIRef(SDO + "knows"), URIRef(EX + "bob")),
        ]

    def test_type_becomes_rdf_type(self, expander):
        doc = {"@context": SDO, "@id": EX + "alice", "@type": "Person"}
        assert expander.expand(doc) == [
            (URIRef(EX + "alice"), RDF.type, URIRef(SDO + "Person")),
        ]

    def test_nested_object_is_blank_node(self, expander):
        doc = {"@context": SDO, "@id": EX + "alice", "address": {"streetAddress": "Main St"}}
        triples = expander.expand(doc)
        objects = [o for _, p, o in triples if p == URIRef(SDO + "address")]
        assert len(objects) == 1
        assert isinstance(objects[0], BNode)

    def test_deterministic(self, expander):
        doc = {"@context": SDO, "name": "A", "email": "a@example.org", "age": 3}
        assert expander.expand(doc) == expander.expand(doc)

    def test_inline_context_needs_no_loader(self):
        expander = PyLdExpander(ContextLoader(allow_remote=False))
        triples = expander.expand({"@context": {"@vocab": EX}, "name": "Test"})
        assert triples[0][1] == URIRef(EX + "name")

    def test_terms_without_mapping_are_dropped(self, expander):
        doc = {"@context": {"name": SDO + "name"}, "name": "Test", "unmapped": "x"}
        assert [p for _, p, _ in expander.expand(doc)] == [URIRef(SDO + "name")]

    def test_unresolvable_context(self, expander):
        doc = {"@context": "https://ctx.example.org/missing", "name": "Test"}
        with pytest.raises(ExpansionFailure) as excinfo:
            expander.expand(doc)
        assert isinstance(excinfo.value.__cause__, jsonld.JsonLdError)

    def test_malformed_context(self, expander):
        with pytest.raises(ExpansionFailure):
            expander.expand({"@context": 5, "name": "Test"})

    def test_expansion_failure_is_inference_failure(self, expander):
        with pytest.raises(InferenceFailure):
            expander.expand({"@context": 5})


# ---------------------------------------------------------------------------
# to_graph
# ---------------------------------------------------------------------------

class TestToGraph:
    def test_builds_rdflib_graph(self, expander):
        doc = {"@context": SDO, "@id": EX + "alice", "name": "Alice", "age": 30}
        graph = to_graph(doc, expander)
        assert len(graph) == 2
        assert str(graph.value(URIRef(EX + "alice"), URIRef(SDO + "name"))) == "Alice"
        assert graph.value(URIRef(EX + "alice"), URIRef(SDO + "age")).toPython() == 30
