"""Handles interactive/command-line mode for the funlang interpreter. Uses cmd as backend."""

import cmd

from funlang.lang.error import LangError


class Shell(cmd.Cmd):
    """funlang interpreter shell."""
    intro = "Welcome to FunLang REPL :: Python backend\nType 'help' for more information or 'exit' to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._first_line = 0  # line num where the pending input started
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary funlang input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._first_line = self.line_num

            joined = self._tmp_line + "\n" + line if self._tmp_line else line
            line, add_to_prev = self.sess.preprocess_line(joined)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return

            self.sess.add(line, self._first_line)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro. Anything after 'help' makes it an ordinary expression."""
        if arg:
            return self.default(self.lastcmd)

        print("Welcome to the FunLang interpreter!\n\n"
              "Declare variables with 'let a = 1;' or constants with 'const b = \"text\";', reassign\n"
              "them with 'a = a + 1', and combine values with + - * / % and the comparisons\n"
              "== != > < >= <= && ||. The value of the last statement is printed after each line.\n\n"
              "Built-in constants: pi, e, version, true, false, null.\n"
              "'help' and 'exit' typed on their own are shell commands.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)

        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            with self.sess.error_handler:
                raise LangError("unrecognized token: '{}'", arg, diagnosis=False)
            return False
        print("Goodbye!")
        return True
