"""ld-shacl-bridge — infer SHACL shapes from plain JSON records.

A record is lifted into JSON-LD by attaching a context, expanded into RDF
triples, and summarised as a single SHACL NodeShape with one property shape
per predicate. The package is organised along that pipeline:

- Lifter (ldshacl.lifter): record + context → JSON-LD document
- Expansion (ldshacl.expansion): JSON-LD document → RDF triples, via PyLD
- Inference (ldshacl.inference): triples → NodeShape → Turtle, via rdflib
- Bridge (ldshacl.bridge): the whole sequence for one conversion request

The inference steps are separate functions:

  analyze_properties(): per-predicate value kind and datatype (last seen wins)
  build_shape():        one sh:property per predicate, sh:minCount 1 on each
  serialize_shape():    Turtle with the sh:, xsd: and rdf: prefixes bound

Persistence, identifier generation and HTTP handling are left to callers.
Requires rdflib, PyLD, structlog and pydantic-settings.
"""
