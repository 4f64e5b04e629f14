"""Graph expansion — JSON-LD document → RDF triples.

Shape inference never reads JSON-LD itself; it consumes the triples an
expander produces. The default expander wraps PyLD's ``to_rdf`` and turns
its dataset dictionaries into rdflib terms. Remote contexts are resolved
through a ContextLoader, which serves registered contexts from memory and
only touches the network when allowed to.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from pyld import jsonld
from rdflib import BNode, Graph, Literal, RDF, URIRef, XSD

from .config import get_settings
from .errors import ExpansionFailure
from .logging import get_logger
from .types import Object, Triple

log = get_logger("expansion")


# ---------------------------------------------------------------------------
# Expander interface
# ---------------------------------------------------------------------------

class GraphExpander(Protocol):
    """Anything that can turn a JSON-LD document into triples.

    Implementations must be deterministic: the same document yields the same
    triples in the same order. Failures are raised as ExpansionFailure.
    """

    def expand(self, document: dict[str, Any]) -> list[Triple]: ...


# ---------------------------------------------------------------------------
# Context loading
# ---------------------------------------------------------------------------

class ContextLoader:
    """PyLD document loader backed by an in-memory registry.

    Registered URLs are answered locally. Anything else goes to PyLD's
    requests loader when ``allow_remote`` is set, and fails otherwise.
    """

    def __init__(
        self,
        contexts: dict[str, dict[str, Any]] | None = None,
        allow_remote: bool | None = None,
    ):
        self._contexts: dict[str, dict[str, Any]] = {}
        for url, document in (contexts or {}).items():
            self.register(url, document)
        if allow_remote is None:
            allow_remote = get_settings().allow_remote_contexts
        self.allow_remote = allow_remote
        self._remote: Callable[..., dict[str, Any]] | None = None

    def register(self, url: str, document: dict[str, Any]) -> None:
        """Serve ``document`` for ``url``.

        A bare context object (without an ``@context`` key) is wrapped so
        that PyLD sees a proper context document.
        """
        if "@context" not in document:
            document = {"@context": document}
        self._contexts[url] = document

    def __contains__(self, url: str) -> bool:
        return url in self._contexts

    def __call__(self, url: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        if url in self._contexts:
            return {
                "contentType": "application/ld+json",
                "contextUrl": None,
                "documentUrl": url,
                "document": self._contexts[url],
            }
        if not self.allow_remote:
            raise jsonld.JsonLdError(
                "Remote context loading is disabled.",
                "jsonld.LoadDocumentError",
                {"url": url},
                code="loading document failed",
            )
        log.info("remote_context_fetch", url=url)
        if self._remote is None:
            self._remote = jsonld.requests_document_loader()
        return self._remote(url, options or {})


# ---------------------------------------------------------------------------
# PyLD expander
# ---------------------------------------------------------------------------

class PyLdExpander:
    """Expands documents with PyLD's JSON-LD → RDF algorithm."""

    def __init__(self, loader: ContextLoader | None = None):
        self.loader = loader if loader is not None else ContextLoader()

    def expand(self, document: dict[str, Any]) -> list[Triple]:
        try:
            dataset = jsonld.to_rdf(document, {"documentLoader": self.loader})
        except jsonld.JsonLdError as exc:
            log.warning("expansion_failed", error=str(exc))
            raise ExpansionFailure(f"could not expand document: {exc}") from exc

        triples: list[Triple] = []
        # '@default' sorts ahead of any named graph
        for graph_triples in dataset.values():
            for raw in graph_triples:
                triples.append((
                    _to_term(raw["subject"]),
                    URIRef(raw["predicate"]["value"]),
                    _to_term(raw["object"]),
                ))
        log.debug("document_expanded", triples=len(triples), graphs=len(dataset))
        return triples


def _to_term(node: dict[str, Any]) -> Object:
    """Convert one PyLD RDF term dictionary into an rdflib term."""
    kind = node["type"]
    if kind == "IRI":
        return URIRef(node["value"])
    if kind == "blank node":
        return BNode(node["value"][2:])

    datatype = node.get("datatype")
    if datatype == str(RDF.langString):
        return Literal(node["value"], lang=node.get("language"))
    if datatype is None or datatype == str(XSD.string):
        # RDF 1.1 simple literal: no explicit datatype
        return Literal(node["value"])
    return Literal(node["value"], datatype=URIRef(datatype))


# ---------------------------------------------------------------------------
# Convenience
# ---------------------------------------------------------------------------

def to_graph(document: dict[str, Any], expander: GraphExpander | None = None) -> Graph:
    """Expand ``document`` into an rdflib Graph for inspection."""
    expander = expander if expander is not None else PyLdExpander()
    graph = Graph()
    for triple in expander.expand(document):
        graph.add(triple)
    return graph
