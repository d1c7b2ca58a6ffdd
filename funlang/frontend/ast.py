"""Abstract syntax tree for funlang. The node set is closed: the evaluator knows how to run exactly these classes.

Every node carries the (line, column) of the token it was built from. Nodes with no single source token keep (0, 0)
(the Program root), and operator expressions take the position of their left operand. Declarations and operator
expressions also remember where their name or operator token sits, for error messages. Positions take no part in
equality, so trees built by hand compare equal to parsed ones.
"""

from abc import ABC
from enum import Enum


class Node(ABC):
    """Superclass of all syntax tree nodes. Subclasses list their payload attributes in `fields`."""
    fields = ()

    def __init__(self, line=0, column=0):
        self.line = line
        self.column = column

    @property
    def kind(self):
        return type(self).__name__

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(<field>=<value>, nodes=[
            <Node>(<field>=<value>, nodes=[
                ...
                <Node>(<field>=<value>)  # <-- if there are no child nodes
            ])
        ])
        """
        attrs, nodes = [], []
        for name in self.fields:
            value = getattr(self, name)
            if isinstance(value, Node):
                nodes.append(value)
            elif isinstance(value, tuple):
                nodes.extend(value)
            else:
                attrs.append(f"{name}={_format(value)}")

        result = f"{'    ' * indents}{self.kind}({', '.join(attrs)}"
        if nodes:
            result += ", nodes=[" if attrs else "nodes=["
            for node in nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        attrs = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.fields)
        return f"{self.kind}({attrs})"

    def __eq__(self, other):
        return type(self) is type(other) and all(getattr(self, name) == getattr(other, name) for name in self.fields)

    def __hash__(self):
        return hash((self.kind,) + tuple(getattr(self, name) for name in self.fields))


def _format(value):
    if isinstance(value, Enum):
        return value.name
    return repr(value)


class Program(Node):
    fields = ("body",)

    def __init__(self, body=(), line=0, column=0):
        super().__init__(line, column)
        self.body = tuple(body)


class VariableDeclaration(Node):
    """`let`/`const` declaration. value is None for `let NAME;`."""
    fields = ("identifier", "constant", "value")

    def __init__(self, identifier, value=None, constant=False, line=0, column=0, identifier_position=None):
        super().__init__(line, column)
        self.identifier = identifier
        self.value = value
        self.constant = constant
        self.identifier_position = identifier_position or (line, column)


class BlockName(Enum):
    IF = "if"
    ELSE_IF = "else if"
    ELSE = "else"


class ControlFlow(Node):
    """One branch of a conditional. Its block runs directly against the enclosing environment."""
    fields = ("block_name", "condition", "block")

    def __init__(self, condition, block_name, block=(), line=0, column=0):
        super().__init__(line, column)
        self.condition = condition
        self.block_name = block_name
        self.block = tuple(block)


class Identifier(Node):
    fields = ("symbol",)

    def __init__(self, symbol, line=0, column=0):
        super().__init__(line, column)
        self.symbol = symbol


class NumericLiteral(Node):
    fields = ("value",)

    def __init__(self, value, line=0, column=0):
        super().__init__(line, column)
        self.value = float(value)


class StringLiteral(Node):
    fields = ("value",)

    def __init__(self, value, line=0, column=0):
        super().__init__(line, column)
        self.value = value


class OperatorExpr(Node):
    """Superclass for two-operand expressions."""
    fields = ("operator", "left", "right")

    def __init__(self, left, operator, right, line=0, column=0, operator_position=None):
        super().__init__(line, column)
        self.left = left
        self.operator = operator
        self.right = right
        self.operator_position = operator_position or (line, column)


class BinaryExpr(OperatorExpr):
    """Arithmetic: + - * / %"""


class LogicalExpr(OperatorExpr):
    """Boolean-valued: && || > < >= <= == !="""


class UnaryExpr(Node):
    fields = ("operator", "operand")

    def __init__(self, operator, operand, line=0, column=0):
        super().__init__(line, column)
        self.operator = operator
        self.operand = operand


class AssignmentExpr(Node):
    """assignee is recorded as parsed; the evaluator checks that it is an Identifier."""
    fields = ("assignee", "value")

    def __init__(self, assignee, value, line=0, column=0):
        super().__init__(line, column)
        self.assignee = assignee
        self.value = value
