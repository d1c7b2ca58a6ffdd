"""Operator semantics over already-evaluated runtime values. node is the expression being evaluated; it supplies the
operator and the operator token position used in error messages.
"""

import math
import operator

from funlang.lang.error import DivisionByZeroError, OperandError
from funlang.runtime.values import (BooleanValue, NumberValue, StringValue, make_boolean, make_null, make_number,
                                    make_string)


def _remainder(lhs, rhs):
    # takes the sign of the dividend; x % 0 and inf % x are NaN
    if rhs == 0 or math.isinf(lhs):
        return math.nan
    return math.fmod(lhs, rhs)


ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": _remainder,
}

LOGICAL = {
    "&&": lambda lhs, rhs: bool(lhs) and bool(rhs),
    "||": lambda lhs, rhs: bool(lhs) or bool(rhs),
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}


def _mismatch(node, lhs, rhs):
    return OperandError("invalid operation '{}' between {} and {}", (node.operator, lhs.type_name, rhs.type_name),
                        *node.operator_position, length=len(node.operator))


def unary_operation(node, operand):
    if node.operator == "-" and isinstance(operand, NumberValue):
        return make_number(-1 * operand.value)
    elif node.operator == "!" and isinstance(operand, BooleanValue):
        return make_boolean(not operand.value)

    raise OperandError("invalid unary operation '{}' on {}", (node.operator, operand.type_name), node.line,
                       node.column)


def numeric_operation(node, lhs, rhs):
    """Applies an arithmetic operator to two floats."""
    if node.operator not in ARITHMETIC:
        raise OperandError("invalid arithmetic operator '{}'", node.operator, *node.operator_position)
    if node.operator == "/" and rhs == 0:
        raise DivisionByZeroError("division by zero", "/", *node.operator_position)

    return make_number(ARITHMETIC[node.operator](lhs, rhs))


def binary_operation(node, lhs, rhs):
    """Arithmetic family. Numbers compute, a string on either side concatenates (only with '+'), booleans count as
    1/0, and any other combination is null.
    """
    if isinstance(lhs, NumberValue) and isinstance(rhs, NumberValue):
        return numeric_operation(node, lhs.value, rhs.value)

    elif isinstance(lhs, StringValue) or isinstance(rhs, StringValue):
        if node.operator != "+":
            raise _mismatch(node, lhs, rhs)
        return make_string(str(lhs) + str(rhs))

    elif isinstance(lhs, BooleanValue) or isinstance(rhs, BooleanValue):
        lhs, rhs = (make_number(1 if side.value else 0) if isinstance(side, BooleanValue) else side
                    for side in (lhs, rhs))
        if isinstance(lhs, NumberValue) and isinstance(rhs, NumberValue):
            return numeric_operation(node, lhs.value, rhs.value)

    return make_null()


def logical_operation(node, lhs, rhs):
    """Comparison family, always boolean-valued. Strings only support '==' and '!='; combinations involving null are
    false.
    """
    comparable = (NumberValue, BooleanValue)

    if isinstance(lhs, comparable) and isinstance(rhs, comparable):
        if node.operator not in LOGICAL:
            raise OperandError("invalid logical operator '{}'", node.operator, *node.operator_position)
        return make_boolean(LOGICAL[node.operator](lhs.value, rhs.value))

    elif isinstance(lhs, StringValue) or isinstance(rhs, StringValue):
        if node.operator not in ("==", "!="):
            raise _mismatch(node, lhs, rhs)
        equal = isinstance(lhs, StringValue) and isinstance(rhs, StringValue) and lhs.value == rhs.value
        return make_boolean(equal if node.operator == "==" else not equal)

    return make_boolean(False)
