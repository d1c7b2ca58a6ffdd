"""Error handling for funlang. Only LangErrors should be encountered while running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class LangError(Exception):
    """Templates an error/warning message so that it can be used to throw a funlang error/warning. exprs fill the `{}`
    slots of msg; exprs[0] should be the offending snippet of source. line and column are 1-based and refer to the
    source registered with the ErrorHandler (0 means unknown).
    """

    def __init__(self, msg, exprs=None, line=0, column=0, length=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = str(exprs[0])
        self.length = length if length != -1 else max(len(self.expr), 1)  # needed for error display

        self.line = line
        self.column = column
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LexicalError(LangError):
    """Source text could not be split into tokens."""


class ParseError(LangError):
    """Token sequence does not follow funlang grammar."""


class SymbolError(LangError):
    """Superclass for name resolution errors."""


class DuplicateDeclarationError(SymbolError):
    pass


class UnknownSymbolError(SymbolError):
    pass


class ReservedNameError(SymbolError):
    pass


class ConstantError(LangError):
    """Assignment to a name declared with `const`."""


class OperandError(LangError):
    """Operator applied to values it does not support."""


class InvalidAssignmentError(OperandError):
    pass


class DivisionByZeroError(LangError):
    pass


class InternalError(LangError):
    """Should be unreachable. Always ends the process when it reaches the ErrorHandler."""

    def __init__(self, msg, exprs=None, **kwargs):
        kwargs.setdefault("diagnosis", False)
        super().__init__(msg, exprs, internal=True, **kwargs)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report funlang errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, source, line_num):
        """Registers source (starting at line_num of path) in traceback. Should be called prior to Session add/run."""
        self.traceback[path] = (source, line_num)

    def remove_line(self, path):
        """Removes source from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def locate(error, source):
        """Returns the (line, column) of error within source, or (0, 0) if the error carries no position."""
        if error.line and source is not None:
            return error.line, error.column
        return 0, 0

    @staticmethod
    def diagnose(error, source, warning=False):
        """Returns offending line of source with the error's span highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line_num, column = ErrorHandler.locate(error, source)
        lines = source.split("\n")
        line = lines[min(line_num, len(lines)) - 1]

        start = max(column - 1, 0)
        end = max(start + error.length, start + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _header(self, error):
        """Returns 'file:line:col: ' for error and the registered source it refers to."""
        if not self.traceback:
            return "", None

        file, (source, first_line) = next(iter(self.traceback.items()))
        line_num, column = ErrorHandler.locate(error, source)
        if source is None or not line_num:
            return colored(f"{file}: ", attrs=["bold"]), source
        return colored(f"{file}:{first_line + line_num - 1}:{column}: ", attrs=["bold"]), source

    def _can_diagnose(self, error, source):
        return source and not error.internal and error.diagnosis and ErrorHandler.locate(error, source)[0]

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = LangError(*args, **kwargs)
        header, source = self._header(error)

        print(header + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        if self._can_diagnose(error, source):
            print(ErrorHandler.diagnose(error, source, warning=True))

    def throw(self, error):
        """Prints error using self.traceback to point at its origin. error must be a LangError. Exits the process if
        the handler is fatal or the error is internal.
        """
        error_msg, source = self._header(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self._can_diagnose(error, source):
            print(ErrorHandler.diagnose(error, source))

        if self.fatal or error.internal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LangError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LangError("expression is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LangError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(InternalError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}"))

        return not do_exit
