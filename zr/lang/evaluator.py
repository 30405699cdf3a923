"""Tree-walking evaluator for the zr language. evaluate dispatches on node kind; every failure raises a
GenericException subclass, which stops the enclosing statement list immediately.
"""

import logging
import sys

from zr.lang import numerical
from zr.lang.error import GenericException, ModuleError, TypeMismatchError
from zr.lang.nodes import BinaryOp
from zr.lang.values import VOID, Value, ValueType


logger = logging.getLogger(__name__)


STRING_COMPARISON = {"==", "!="}
LOGICAL = {
    "&&": lambda left, right: left and right,
    "||": lambda left, right: left or right,
}


class Evaluator:
    """Evaluates AST nodes against a SymbolTable. Printed values go to output (sys.stdout when None, looked up at print
    time so that redirections of sys.stdout are honored).
    """

    def __init__(self, symbols, output=None):
        self.symbols = symbols
        self.output = output

    def evaluate(self, node):
        """Returns Value of node."""
        method = getattr(self, f"evaluate_{node.kind}", None)
        if method is None:
            raise GenericException("'{}' is not supported", node.kind, at=node)
        return method(node)

    def run(self, statements):
        """Evaluates statements in order in the current scope. Returns value of the last one, or VOID if empty."""
        value = VOID
        for statement in statements:
            logger.debug("line %s: evaluating %s", statement.line, statement.kind)
            value = self.evaluate(statement)
        return value

    def evaluate_numberliteral(self, node):
        return numerical.number(node.text, node.data_type, at=node)

    def evaluate_stringliteral(self, node):
        return Value(ValueType.STRING, node.value)

    def evaluate_boolliteral(self, node):
        return Value(ValueType.BOOL, node.value)

    def evaluate_identifier(self, node):
        return self.symbols.lookup(node.name, at=node)

    def evaluate_binaryop(self, node):
        """Walks the right-hand spine of an operator chain with a stack: every operand is evaluated left to right,
        then the operators are applied from the innermost (rightmost) outwards.
        """
        pending = []
        while isinstance(node, BinaryOp):
            pending.append((node, self.evaluate(node.left)))
            node = node.right

        value = self.evaluate(node)
        while pending:
            node, left = pending.pop()
            value = self.apply(node, left, value)
        return value

    def apply(self, node, left, right):
        """Applies operator of BinaryOp node to two evaluated operands."""
        op = node.op

        if left.type.is_numeric and right.type.is_numeric:
            if op in numerical.ARITHMETIC:
                return numerical.arithmetic(op, left, right, at=node)
            elif op in numerical.COMPARISON:
                return numerical.compare(op, left, right)

        elif left.type is ValueType.STRING and right.type is ValueType.STRING and op in STRING_COMPARISON:
            return Value(ValueType.BOOL, (left.data == right.data) == (op == "=="))

        elif left.type is ValueType.BOOL and right.type is ValueType.BOOL and op in LOGICAL:
            return Value(ValueType.BOOL, LOGICAL[op](left.data, right.data))

        raise TypeMismatchError("unsupported operand types for '{}': {} and {}", (op, left.type, right.type), at=node)

    def evaluate_if(self, node):
        condition = self.evaluate(node.condition)
        if condition.type is not ValueType.BOOL:
            raise TypeMismatchError("if condition must be bool, got {}", (condition.type,), at=node.condition)

        branch = node.then_body if condition.data else node.else_body
        if branch is None:
            return VOID
        return self.evaluate_block(branch)

    def evaluate_let(self, node):
        value = self.evaluate(node.initializer)
        if node.declared_type is not None:
            value = numerical.convert(value, node.declared_type, at=node)

        self.symbols.define(node.name, value)
        return value

    def evaluate_print(self, node):
        value = self.evaluate(node.operand)
        print(value.render(), file=self.output if self.output is not None else sys.stdout, flush=True)
        return value

    def evaluate_loadmodule(self, node):
        raise ModuleError("'loadin \"{}\"' is only allowed at the top level of a file", node.name, at=node)

    def evaluate_block(self, node):
        with self.symbols.scope():
            return self.run(node.statements)
