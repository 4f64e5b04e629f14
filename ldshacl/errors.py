"""Error taxonomy for the bridge.

  InvalidInput          : the lifter was handed something that is not a record
  InferenceFailure      : shape generation aborted; no partial shape exists
    ExpansionFailure    : the JSON-LD processor could not turn the document
                          into triples (bad context, malformed structure)
  SerializationFailure  : a well-formed shape could not be rendered; a bug
"""

from __future__ import annotations


class LdShaclError(Exception):
    """Base class for every error raised by ldshacl."""


class InvalidInput(LdShaclError, ValueError):
    """The input is not a JSON-like mapping (or not JSON at all)."""


class InferenceFailure(LdShaclError):
    """Shape generation failed for a document."""


class ExpansionFailure(InferenceFailure):
    """Graph expansion could not resolve the document."""


class SerializationFailure(LdShaclError):
    """Rendering an internally built shape failed."""
