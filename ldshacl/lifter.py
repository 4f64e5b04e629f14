"""Document Lifter — turns a plain record into a JSON-LD document.

A record becomes linked data by gaining an ``@context`` declaration. A record
that already declares one is returned as it is: the caller's context is
ignored rather than overriding what the record says about itself.
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidInput
from .logging import get_logger
from .types import JsonKind, JsonValue

log = get_logger("lifter")

CONTEXT_KEY = "@context"


def is_linked_data(record: Any) -> bool:
    """True if ``record`` is a mapping that already declares a context."""
    return isinstance(record, dict) and CONTEXT_KEY in record


def lift(record: Any, context: Any) -> dict[str, Any]:
    """Return ``record`` as a JSON-LD document using ``context``.

    ``context`` may be an IRI, an inline context object, or a list of these.
    The input record is never mutated; when a context has to be added the
    result is a deep copy of the record plus ``@context``.

    Raises InvalidInput if ``record`` is not a JSON mapping or ``context`` is
    not a usable context value.
    """
    value = JsonValue.from_python(record)
    if not value.is_mapping:
        raise InvalidInput(f"record must be a mapping, got {value.kind.value}")

    if is_linked_data(record):
        log.debug("context_preserved", keys=len(record))
        return record

    _check_context(context)
    log.debug("context_added", keys=len(record))
    return {**value.to_python(), CONTEXT_KEY: context}


def _check_context(context: Any) -> None:
    kind = JsonValue.from_python(context).kind
    if kind is JsonKind.SEQUENCE:
        for entry in context:
            _check_context_entry(entry)
    else:
        _check_context_entry(context)


def _check_context_entry(entry: Any) -> None:
    kind = JsonValue.from_python(entry).kind
    if kind is JsonKind.STRING:
        if not entry:
            raise InvalidInput("context IRI must not be empty")
    elif kind is not JsonKind.MAPPING:
        raise InvalidInput(f"context must be an IRI or a context object, got {kind.value}")
