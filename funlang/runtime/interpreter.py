"""Tree-walking evaluator. evaluate dispatches on the node class; every function here takes (node, env) and returns a
RuntimeValue, mutating env as a side effect of declarations and assignments.
"""

from funlang.frontend.ast import (AssignmentExpr, BinaryExpr, BlockName, ControlFlow, Identifier, LogicalExpr,
                                  NumericLiteral, Program, StringLiteral, UnaryExpr, VariableDeclaration)
from funlang.lang.error import (ConstantError, InternalError, InvalidAssignmentError, ReservedNameError,
                                SymbolError)
from funlang.runtime.environment import RESERVED_NAMES
from funlang.runtime.operators import binary_operation, logical_operation, unary_operation
from funlang.runtime.values import BooleanValue, NumberValue, StringValue, make_null, make_number, make_string


def evaluate(node, env):
    """Evaluates node against env. Raises InternalError for anything outside the node set."""
    try:
        handler = EVALUATORS[type(node)]
    except KeyError:
        raise InternalError("'{}' is not an evaluable node", type(node).__name__) from None
    return handler(node, env)


def _locate(error, position):
    """Gives an error raised by the environment, which only knows names, the position of the node that caused it."""
    if not error.line:
        error.line, error.column = position
    return error


def evaluate_program(program, env):
    last_evaluated = make_null()
    for statement in program.body:
        last_evaluated = evaluate(statement, env)
    return last_evaluated


def evaluate_variable_declaration(declaration, env):
    value = evaluate(declaration.value, env) if declaration.value is not None else make_null()
    try:
        return env.declare(declaration.identifier, value, declaration.constant)
    except SymbolError as error:
        raise _locate(error, declaration.identifier_position)


def evaluate_identifier(identifier, env):
    try:
        return env.lookup(identifier.symbol)
    except SymbolError as error:
        raise _locate(error, (identifier.line, identifier.column))


def evaluate_assignment(node, env):
    assignee = node.assignee
    if not isinstance(assignee, Identifier):
        raise InvalidAssignmentError("invalid left-hand side of assignment: {}", assignee.kind, assignee.line,
                                     assignee.column, length=1)

    if assignee.symbol in RESERVED_NAMES:
        raise ReservedNameError("cannot assign to built-in '{}'", assignee.symbol, assignee.line, assignee.column)

    value = evaluate(node.value, env)
    try:
        return env.assign(assignee.symbol, value)
    except (SymbolError, ConstantError) as error:
        raise _locate(error, (assignee.line, assignee.column))


def evaluate_unary_expression(node, env):
    return unary_operation(node, evaluate(node.operand, env))


def evaluate_binary_expression(node, env):
    lhs = evaluate(node.left, env)
    rhs = evaluate(node.right, env)
    return binary_operation(node, lhs, rhs)


def evaluate_logical_expression(node, env):
    lhs = evaluate(node.left, env)
    rhs = evaluate(node.right, env)
    return logical_operation(node, lhs, rhs)


def is_truthy(value):
    """Numbers are truthy when positive, strings when non-empty, booleans when true. Null never is."""
    if isinstance(value, BooleanValue):
        return value.value
    elif isinstance(value, NumberValue):
        return value.value > 0
    elif isinstance(value, StringValue):
        return len(value.value) > 0
    return False


def evaluate_control_flow(node, env):
    truthy = is_truthy(evaluate(node.condition, env))

    if node.block_name is BlockName.ELSE:
        run = not truthy
    else:
        run = truthy

    if run:
        for statement in node.block:  # no new scope: the block shares env
            evaluate(statement, env)

    return make_null()


EVALUATORS = {
    Program: evaluate_program,
    VariableDeclaration: evaluate_variable_declaration,
    ControlFlow: evaluate_control_flow,
    Identifier: evaluate_identifier,
    NumericLiteral: lambda node, env: make_number(node.value),
    StringLiteral: lambda node, env: make_string(node.value),
    BinaryExpr: evaluate_binary_expression,
    LogicalExpr: evaluate_logical_expression,
    UnaryExpr: evaluate_unary_expression,
    AssignmentExpr: evaluate_assignment,
}
