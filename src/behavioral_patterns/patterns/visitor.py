"""
Visitor pattern - operations over arithmetic expression trees.

Node classes only know how to ``accept`` a visitor; every operation
(evaluation, printing, variable collection, constant folding) lives in its
own visitor class. ``accept`` performs the double dispatch by calling the
visitor method named after the node type.
"""
import ast
import math
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Union

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.core.exceptions import EvaluationError, ValidationError

NumberValue = Union[int, float]

# Integer powers above this many bits are refused instead of computed
MAX_POWER_BITS = 4096


def _power(base: NumberValue, exponent: NumberValue) -> NumberValue:
    """``base ** exponent`` restricted to real results of bounded size."""
    if isinstance(base, int) and isinstance(exponent, int) and exponent > 0 and abs(base) > 1:
        if exponent * math.log2(abs(base)) > MAX_POWER_BITS:
            raise OverflowError("integer power too large")
    result = base ** exponent
    if isinstance(result, complex):
        raise ValueError("power has no real result")
    return result


BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "**": _power,
}
UNARY_OPERATORS: Dict[str, Callable[[Any], Any]] = {"-": operator.neg, "+": operator.pos}

# Binding strength used by the printer
_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "unary": 3, "**": 4, "atom": 5}


class Node(ABC):
    """Element interface."""

    @abstractmethod
    def accept(self, visitor: "ExpressionVisitor") -> Any:
        """Dispatch to the matching ``visitor.visit_*`` method."""


@dataclass(frozen=True)
class Number(Node):
    value: NumberValue

    def accept(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.visit_number(self)


@dataclass(frozen=True)
class Variable(Node):
    name: str

    def accept(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.visit_variable(self)


@dataclass(frozen=True)
class UnaryOp(Node):
    op: str
    operand: Node

    def __post_init__(self):
        if self.op not in UNARY_OPERATORS:
            raise ValidationError(f"Unsupported unary operator {self.op!r}")

    def accept(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.visit_unary(self)


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node

    def __post_init__(self):
        if self.op not in BINARY_OPERATORS:
            raise ValidationError(f"Unsupported binary operator {self.op!r}")

    def accept(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.visit_binary(self)


class ExpressionVisitor(ABC):
    """Visitor interface: one method per node type."""

    def visit(self, node: Node) -> Any:
        return node.accept(self)

    @abstractmethod
    def visit_number(self, node: Number) -> Any: ...

    @abstractmethod
    def visit_variable(self, node: Variable) -> Any: ...

    @abstractmethod
    def visit_unary(self, node: UnaryOp) -> Any: ...

    @abstractmethod
    def visit_binary(self, node: BinaryOp) -> Any: ...


class Evaluator(ExpressionVisitor):
    """Compute the value of a tree given variable bindings."""

    def __init__(self, variables: Optional[Mapping[str, NumberValue]] = None):
        self.variables = dict(variables or {})

    def visit_number(self, node: Number) -> NumberValue:
        return node.value

    def visit_variable(self, node: Variable) -> NumberValue:
        if node.name not in self.variables:
            raise EvaluationError(f"Undefined variable '{node.name}'", node.name)
        return self.variables[node.name]

    def visit_unary(self, node: UnaryOp) -> NumberValue:
        return UNARY_OPERATORS[node.op](self.visit(node.operand))

    def visit_binary(self, node: BinaryOp) -> NumberValue:
        left = self.visit(node.left)
        right = self.visit(node.right)
        try:
            return BINARY_OPERATORS[node.op](left, right)
        except ZeroDivisionError as e:
            raise EvaluationError(f"Division by zero in {InfixPrinter().visit(node)}") from e
        except OverflowError as e:
            raise EvaluationError(f"Overflow in {InfixPrinter().visit(node)}") from e
        except ValueError as e:
            raise EvaluationError(f"No real result for {InfixPrinter().visit(node)}") from e


class InfixPrinter(ExpressionVisitor):
    """Render a tree as infix text with the fewest parentheses needed."""

    def visit_number(self, node: Number) -> str:
        return repr(node.value)

    def visit_variable(self, node: Variable) -> str:
        return node.name

    def visit_unary(self, node: UnaryOp) -> str:
        operand = self._wrap(node.operand, lambda p: p < _PRECEDENCE["unary"])
        return f"{node.op}{operand}"

    def visit_binary(self, node: BinaryOp) -> str:
        p = _PRECEDENCE[node.op]
        if node.op == "**":
            # Right associative
            left = self._wrap(node.left, lambda q: q <= p)
            right = self._wrap(node.right, lambda q: q < _PRECEDENCE["unary"])
        else:
            left = self._wrap(node.left, lambda q: q < p)
            right = self._wrap(node.right, lambda q: q <= p)
        return f"{left} {node.op} {right}"

    def _wrap(self, node: Node, needs_parens: Callable[[int], bool]) -> str:
        text = self.visit(node)
        return f"({text})" if needs_parens(self._precedence(node)) else text

    @staticmethod
    def _precedence(node: Node) -> int:
        if isinstance(node, BinaryOp):
            return _PRECEDENCE[node.op]
        if isinstance(node, UnaryOp):
            return _PRECEDENCE["unary"]
        if isinstance(node, Number) and node.value < 0:
            return _PRECEDENCE["unary"]
        return _PRECEDENCE["atom"]


class VariableCollector(ExpressionVisitor):
    """Collect the names of all free variables."""

    def visit_number(self, node: Number) -> Set[str]:
        return set()

    def visit_variable(self, node: Variable) -> Set[str]:
        return {node.name}

    def visit_unary(self, node: UnaryOp) -> Set[str]:
        return self.visit(node.operand)

    def visit_binary(self, node: BinaryOp) -> Set[str]:
        return self.visit(node.left) | self.visit(node.right)


class ConstantFolder(ExpressionVisitor):
    """Return a new tree with every constant sub-expression pre-computed."""

    def visit_number(self, node: Number) -> Node:
        return node

    def visit_variable(self, node: Variable) -> Node:
        return node

    def visit_unary(self, node: UnaryOp) -> Node:
        operand = self.visit(node.operand)
        if isinstance(operand, Number):
            return Number(UNARY_OPERATORS[node.op](operand.value))
        return UnaryOp(node.op, operand)

    def visit_binary(self, node: BinaryOp) -> Node:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if isinstance(left, Number) and isinstance(right, Number):
            # Leave failing sub-expressions for the evaluator to report
            try:
                return Number(BINARY_OPERATORS[node.op](left.value, right.value))
            except (ZeroDivisionError, OverflowError, ValueError):
                pass
        return BinaryOp(node.op, left, right)


class _PythonAstTranslator(ast.NodeVisitor):
    """Translate a Python expression AST into expression nodes."""

    _BINOPS = {ast.Add: "+", ast.Sub: "-", ast.Mult: "*", ast.Div: "/", ast.Pow: "**"}
    _UNARYOPS = {ast.USub: "-", ast.UAdd: "+"}

    def visit_Expression(self, node: ast.Expression) -> Node:
        return self.visit(node.body)

    def visit_Constant(self, node: ast.Constant) -> Node:
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValidationError(f"Unsupported literal {node.value!r}")
        if isinstance(node.value, float) and not math.isfinite(node.value):
            raise ValidationError(f"Non-finite literal {node.value!r}")
        return Number(node.value)

    def visit_Name(self, node: ast.Name) -> Node:
        return Variable(node.id)

    def visit_BinOp(self, node: ast.BinOp) -> Node:
        op = self._BINOPS.get(type(node.op))
        if op is None:
            raise ValidationError(f"Unsupported operator {type(node.op).__name__}")
        return BinaryOp(op, self.visit(node.left), self.visit(node.right))

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Node:
        op = self._UNARYOPS.get(type(node.op))
        if op is None:
            raise ValidationError(f"Unsupported operator {type(node.op).__name__}")
        return UnaryOp(op, self.visit(node.operand))

    def generic_visit(self, node: ast.AST) -> Node:
        raise ValidationError(f"Unsupported syntax: {type(node).__name__}")


def parse_expression(text: str) -> Node:
    """Build an expression tree from Python arithmetic syntax."""
    try:
        tree = ast.parse(text.strip(), mode="eval")
    except SyntaxError as e:
        raise ValidationError(f"Invalid expression {text!r}: {e.msg}") from e
    return _PythonAstTranslator().visit(tree)


@pattern_demo("visitor")
def demo() -> List[str]:
    """Run four visitors over the same tree."""
    tree = parse_expression("(x + 2) * (3 - 1) ** 2 / -y")
    folded = ConstantFolder().visit(tree)
    return [
        f"printed:   {InfixPrinter().visit(tree)}",
        f"variables: {', '.join(sorted(VariableCollector().visit(tree)))}",
        f"folded:    {InfixPrinter().visit(folded)}",
        f"value:     {Evaluator({'x': 4, 'y': 2}).visit(tree)}",
    ]
