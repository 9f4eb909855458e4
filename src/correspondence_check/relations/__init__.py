"""Relation domain exports."""

from .builtin_relations import (
    BUILTIN_RELATION_NAMES,
    UnknownRelationError,
    build_relation,
    parse_integer,
)
from .relation_models import (
    DiffOutcome,
    Relation,
    RelationOutcome,
    equality,
    from_predicate,
    tolerance,
    transforming,
)

__all__ = [
    "Relation",
    "RelationOutcome",
    "DiffOutcome",
    "equality",
    "from_predicate",
    "tolerance",
    "transforming",
    "BUILTIN_RELATION_NAMES",
    "UnknownRelationError",
    "build_relation",
    "parse_integer",
]
