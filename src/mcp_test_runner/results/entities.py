#
# src/mcp_test_runner/results/entities.py
#
"""
Boundary adapter between a runner's reported-entity tree and the rest of the
package.

Runners hand back nodes of unknown shape: decoded JSON mappings from the
subprocess adapters, or plain objects. `classify` turns any such node into one
of two tagged variants, `Collection` or `Case`, looking only at structure
(is there a `children` sequence? is there a `status`?) and never at names or
paths. It is total: anything it cannot make sense of becomes a `Case` with a
synthesized "pending" status.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

from attrs import define, field

from .models import PENDING_STATUS

ANONYMOUS_NAME = "<anonymous>"

_MISSING = object()


@define(frozen=True, slots=True)
class Collection:
    """A grouping node (file, suite, class). Children are raw, unclassified entities."""

    name: str
    children: tuple[Any, ...] = field(factory=tuple)


@define(frozen=True, slots=True)
class Case:
    """A leaf test case as reported by the runner."""

    name: str
    status: str
    error: Any = field(default=None)


ReportedEntity: TypeAlias = Collection | Case


def read_field(node: Any, name: str) -> Any:
    """
    Reads `name` from a mapping key or an object attribute.

    Returns `_MISSING` when the field is absent or reading it raises.
    """
    try:
        if isinstance(node, Mapping):
            return node.get(name, _MISSING)
        return getattr(node, name, _MISSING)
    except Exception:
        return _MISSING


def is_missing(value: Any) -> bool:
    return value is _MISSING or value is None


def _as_children(value: Any) -> tuple[Any, ...] | None:
    if is_missing(value) or isinstance(value, str | bytes | Mapping):
        return None
    if isinstance(value, Sequence):
        return tuple(value)
    return None


def _as_name(value: Any) -> str:
    if is_missing(value):
        return ANONYMOUS_NAME
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:
        return ANONYMOUS_NAME


def classify(entity: Any) -> ReportedEntity:
    """Classifies a reported entity as a `Collection` or a `Case`."""
    name = _as_name(read_field(entity, "name"))

    children = _as_children(read_field(entity, "children"))
    if children is not None:
        return Collection(name=name, children=children)

    status = read_field(entity, "status")
    if not isinstance(status, str) or not status:
        status = PENDING_STATUS

    error = read_field(entity, "error")
    return Case(name=name, status=status, error=None if is_missing(error) else error)


# 🔼⚙️
