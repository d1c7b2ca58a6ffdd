import unittest

from funlang.frontend.ast import (AssignmentExpr, BinaryExpr, BlockName, ControlFlow, Identifier, NumericLiteral,
                                  Program, StringLiteral, UnaryExpr, VariableDeclaration)
from funlang.frontend.parser import Parser


class NodeTestCase(unittest.TestCase):

    def test_kind(self):
        cases = {
            Program(): "Program",
            Identifier("a"): "Identifier",
            NumericLiteral(1): "NumericLiteral",
            UnaryExpr("-", NumericLiteral(1)): "UnaryExpr",
            ControlFlow(Identifier("a"), BlockName.IF): "ControlFlow",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, case.kind)

    def test_equality_ignores_position(self):
        self.assertEqual(Identifier("a", 3, 4), Identifier("a"))
        self.assertEqual(BinaryExpr(NumericLiteral(1, 1, 1), "+", NumericLiteral(2, 1, 5), 1, 1),
                         BinaryExpr(NumericLiteral(1), "+", NumericLiteral(2)))
        self.assertEqual(VariableDeclaration("a", None, False, 1, 1, (1, 5)), VariableDeclaration("a"))

    def test_token_positions_default_to_node_position(self):
        self.assertEqual((2, 3), BinaryExpr(Identifier("a"), "+", Identifier("b"), 2, 3).operator_position)
        self.assertEqual((2, 7), BinaryExpr(Identifier("a"), "+", Identifier("b"), 2, 3, (2, 7)).operator_position)
        self.assertEqual((4, 1), VariableDeclaration("a", None, False, 4, 1).identifier_position)

        should_differ = [
            (Identifier("a"), Identifier("b")),
            (Identifier("a"), StringLiteral("a")),
            (VariableDeclaration("a", None, True), VariableDeclaration("a", None, False)),
            (BinaryExpr(Identifier("a"), "+", Identifier("b")), BinaryExpr(Identifier("a"), "-", Identifier("b"))),
            (ControlFlow(Identifier("a"), BlockName.IF), ControlFlow(Identifier("a"), BlockName.ELSE)),
        ]
        for first, second in should_differ:
            self.assertNotEqual(first, second)

    def test_repr(self):
        self.assertEqual("AssignmentExpr(assignee=Identifier(symbol='a'), value=NumericLiteral(value=1.0))",
                         repr(AssignmentExpr(Identifier("a"), NumericLiteral(1))))

    def test_display(self):
        program = Parser().produce_ast("let a = 1 + b;\n!a")
        expected = (
            "Program(nodes=[\n"
            "    VariableDeclaration(identifier='a', constant=False, nodes=[\n"
            "        BinaryExpr(operator='+', nodes=[\n"
            "            NumericLiteral(value=1.0),\n"
            "            Identifier(symbol='b')\n"
            "        ])\n"
            "    ]),\n"
            "    UnaryExpr(operator='!', nodes=[\n"
            "        Identifier(symbol='a')\n"
            "    ])\n"
            "])"
        )
        self.assertEqual(expected, program.display())

        self.assertEqual("Program()", Program().display())
        self.assertEqual("VariableDeclaration(identifier='a', constant=True, value=None)",
                         VariableDeclaration("a", None, True).display())
        self.assertEqual("ControlFlow(block_name=ELSE, nodes=[\n    Identifier(symbol='x')\n])",
                         ControlFlow(Identifier("x"), BlockName.ELSE).display())


if __name__ == '__main__':
    unittest.main()
