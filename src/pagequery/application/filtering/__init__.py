"""Application filtering – predicate tree and the request → predicate compiler."""
from pagequery.application.filtering.predicate import AnyOf, Node, Operator, Predicate, PredicateTree
from pagequery.application.filtering.compiler import FilterCompiler

__all__ = ["AnyOf", "FilterCompiler", "Node", "Operator", "Predicate", "PredicateTree"]
