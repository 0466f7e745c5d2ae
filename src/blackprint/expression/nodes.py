#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/expression/nodes.py
"""AST node classes for the expression language.

Nodes are frozen dataclasses so a parsed expression can be cached and shared
between any number of concurrent evaluations. Each node supports the visitor
pattern through :meth:`Expression.accept`.

Node Hierarchy
--------------
    - Literal: number, string, boolean or null constant
    - Name: context lookup
    - Attribute: ``target.name``
    - Index: ``target[index]``
    - Not: ``!operand``
    - BinaryOp: arithmetic, comparison and logical operators
    - Ternary: ``condition ? if_true : if_false``

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class Expression(ABC):
    """Base class for all expression nodes."""

    position: int

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result of the visitor's processing

        """


@dataclass(frozen=True)
class Literal(Expression):
    """Constant value: number, string, boolean or null."""

    value: Any
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_literal(self)


@dataclass(frozen=True)
class Name(Expression):
    """Identifier resolved against the evaluation context."""

    name: str
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_name(self)


@dataclass(frozen=True)
class Attribute(Expression):
    """Property access ``target.name``."""

    target: Expression
    name: str
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_attribute(self)


@dataclass(frozen=True)
class Index(Expression):
    """Element access ``target[index]``."""

    target: Expression
    index: Expression
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_index(self)


@dataclass(frozen=True)
class Not(Expression):
    """Logical negation ``!operand``."""

    operand: Expression
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_not(self)


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Binary operator application.

    Parameters
    ----------
    operator : str
        One of ``* / // % + - == != < > <= >= && ||``
    left : Expression
        Left operand
    right : Expression
        Right operand

    """

    operator: str
    left: Expression
    right: Expression
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_binary_op(self)


@dataclass(frozen=True)
class Ternary(Expression):
    """Conditional expression ``condition ? if_true : if_false``."""

    condition: Expression
    if_true: Expression
    if_false: Expression
    position: int = field(default=0, compare=False)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_ternary(self)
