"""Application filtering – Predicate, AnyOf and PredicateTree."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Iterable, Iterator, Union


class Operator(str, Enum):
    EQ = "eq"
    IN = "in"
    GTE = "gte"
    LTE = "lte"
    CONTAINS = "contains"
    ICONTAINS = "icontains"
    IS_NULL = "is_null"


@dataclasses.dataclass(frozen=True)
class Predicate:
    """A single resolved constraint on a storage column.

    For ``IN`` the value is a tuple; for ``IS_NULL`` it is ``True`` (column is
    null) or ``False`` (column is not null).
    """

    field: str
    operator: Operator
    value: Any = None

    @classmethod
    def is_null(cls, field: str) -> "Predicate":
        return cls(field, Operator.IS_NULL, True)

    @classmethod
    def not_null(cls, field: str) -> "Predicate":
        return cls(field, Operator.IS_NULL, False)


@dataclasses.dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates; matches when at least one matches."""

    predicates: tuple[Predicate, ...]


Node = Union[Predicate, AnyOf]


@dataclasses.dataclass(frozen=True)
class PredicateTree:
    """Ordered conjunction of nodes. An empty tree matches every row."""

    nodes: tuple[Node, ...] = ()

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def with_scope(self, scope: Iterable[Node]) -> "PredicateTree":
        """Return a new tree with *scope* nodes prepended."""
        return PredicateTree(tuple(scope) + self.nodes)

    def fields(self) -> list[str]:
        """Columns referenced by the tree, in order of first appearance."""
        seen: list[str] = []
        for node in self.nodes:
            members = node.predicates if isinstance(node, AnyOf) else (node,)
            for predicate in members:
                if predicate.field not in seen:
                    seen.append(predicate.field)
        return seen


__all__ = ["AnyOf", "Node", "Operator", "Predicate", "PredicateTree"]
