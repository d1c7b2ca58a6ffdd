"""Session control for funlang. Drives the lexer/parser/evaluator pipeline, either in command-line mode or file
interpretation mode. One Parser and one global Environment live for the whole session, so declarations persist from
one input to the next.
"""

import re

from funlang import __version__
from funlang.frontend.parser import Parser
from funlang.lang.error import LangError
from funlang.runtime.environment import create_global_environment
from funlang.runtime.interpreter import evaluate


class Session:
    """Governs a funlang session: parsed programs waiting to run, their results, and the global scope."""
    SH_FILE = "<in>"  # command-line interpreter filename
    VERSION = __version__
    STRING = re.compile(r"\"[^\"]*\"")

    def __init__(self, error_handler, path, cmd_line, show_ast=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.show_ast = show_ast    # print every parsed program before running it

        self.parser = Parser()
        self.env = create_global_environment(Session.VERSION)

        self.to_exec = {}  # dict of line num: (source, Program) to execute
        self.results = []

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise LangError("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)
            if not self.to_exec[1][1].body:
                self.error_handler.warn("'{}' contains no statements", path, diagnosis=False)

        elif not cmd_line:
            raise LangError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the line without trailing whitespace and whether it has
        to be continued on the next line (open parentheses or an open string literal).
        """
        line = line.rstrip()
        in_string = line.count("\"") % 2 == 1
        code = Session.STRING.sub("", line)  # parentheses inside strings do not count
        return line, in_string or code.count("(") > code.count(")")

    def add(self, source, line_num):
        """Parses source (which starts at line_num of self.path) and queues it. Evaluation is delayed until run."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        program = self.parser.produce_ast(source)
        if self.show_ast:
            print(program.display())
        self.to_exec[line_num] = (source, program)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates queued programs in order against the session environment, collecting their values. Any error is
        raised; side effects of statements that completed before it are kept.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, source, line_num)

            try:
                self.results.append(evaluate(program, self.env))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Returns the oldest unread result."""
        return self.results.pop(0)
