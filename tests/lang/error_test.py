import io
import re
import unittest
from contextlib import redirect_stdout

from funlang.lang.error import (ErrorHandler, InternalError, LangError, LexicalError, OperandError, ParseError,
                                UnknownSymbolError)


ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return ANSI.sub("", text)


class LangErrorTestCase(unittest.TestCase):

    def test_init(self):
        error = LexicalError("unexpected character '{}'", "@", 2, 7)
        self.assertEqual(("@", 2, 7, 1), (error.expr, error.line, error.column, error.length))
        self.assertEqual("unexpected character '@'", plain(error.msg))
        self.assertEqual(error.msg, str(error))
        self.assertFalse(error.internal)

    def test_multiple_exprs(self):
        error = OperandError("invalid operation '{}' between {} and {}", ("-", "string", "number"))
        self.assertEqual("-", error.expr)
        self.assertEqual("invalid operation '-' between string and number", plain(error.msg))

    def test_no_exprs(self):
        error = LangError("keyboard interrupt")
        self.assertEqual(("", 1), (error.expr, error.length))

    def test_internal(self):
        error = InternalError("'{}' is not an evaluable node", "Bogus")
        self.assertTrue(error.internal)
        self.assertFalse(error.diagnosis)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_locate(self):
        source = "const c = 1;\nlet b = c;"
        cases = [
            (LexicalError("x", "@", 1, 5), source, (1, 5)),
            (UnknownSymbolError("symbol '{}' was not declared", "c", 2, 9), source, (2, 9)),
            (UnknownSymbolError("symbol '{}' was not declared", "c"), source, (0, 0)),  # never guessed from the name
            (LexicalError("x", "@", 1, 5), None, (0, 0)),
        ]
        for error, text, expected in cases:
            self.assertEqual(expected, ErrorHandler.locate(error, text))

    def test_diagnose(self):
        error = LexicalError("unexpected character '{}'", "@", 1, 5)
        lines = plain(ErrorHandler.diagnose(error, "let @ = 1")).split("\n")
        self.assertEqual(["  let @ = 1", "      ^"], lines)

        error = ParseError("unexpected token '{}'", "End", 2, 3, length=3)
        lines = plain(ErrorHandler.diagnose(error, "1 +\n  End")).split("\n")
        self.assertEqual(["    End", "    ^~~"], lines)

    def test_throw(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("<in>")
        handler.register_line("<in>", "let a = 1;\nlet b = 1 @ 2;", 4)

        output = io.StringIO()
        with redirect_stdout(output):
            handler.throw(LexicalError("unexpected character '{}'", "@", 2, 11))

        lines = plain(output.getvalue()).split("\n")
        self.assertEqual("<in>:5:11: error: unexpected character '@'", lines[0])
        self.assertEqual("  let b = 1 @ 2;", lines[1])
        self.assertEqual({}, handler.traceback)

    def test_throw_without_source(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.fl")

        output = io.StringIO()
        with redirect_stdout(output):
            handler.throw(LangError("'{}' could not be opened", "prog.fl", diagnosis=False))
        self.assertEqual("prog.fl: error: 'prog.fl' could not be opened\n", plain(output.getvalue()))

    def test_fatal(self):
        handler = ErrorHandler(fatal=True)
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                handler.throw(ParseError("unexpected token '{}'", ")"))
        self.assertEqual(1, context.exception.code)

    def test_internal_is_always_fatal(self):
        handler = ErrorHandler(fatal=False)
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(SystemExit):
                handler.throw(InternalError("'{}' is not an evaluable node", "Bogus"))
        self.assertIn("[internal] error: 'Bogus' is not an evaluable node", plain(output.getvalue()))

    def test_warn(self):
        handler = ErrorHandler()
        handler.register_file("empty.fl")
        output = io.StringIO()
        with redirect_stdout(output):
            handler.warn("'{}' contains no statements", "empty.fl", diagnosis=False)
        self.assertEqual("empty.fl: warning: 'empty.fl' contains no statements\n", plain(output.getvalue()))

    def test_context_manager(self):
        handler = ErrorHandler(fatal=False)

        with redirect_stdout(io.StringIO()):
            with handler:
                raise ParseError("unexpected token '{}'", ")")
            with handler:
                raise KeyboardInterrupt()
            with handler:
                raise RecursionError()

            with self.assertRaises(SystemExit):
                with handler:
                    raise ValueError("not a language error")

            with self.assertRaises(SystemExit):
                with handler:
                    raise SystemExit(0)

    def test_unknown_error_message(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(SystemExit):
                with ErrorHandler(fatal=False):
                    raise KeyError("{braces}")
        self.assertIn("[internal] error: unknown error: 'KeyError: '{braces}''", plain(output.getvalue()))


if __name__ == '__main__':
    unittest.main()
