"""Uses the funlang pipeline to interpret source files or run in command-line mode, inside the error handling context
manager. Installed as the `funlang` console script.
"""

import argparse

from funlang import __version__
from funlang.lang.error import ErrorHandler
from funlang.lang.session import Session
from funlang.lang.shell import Shell


def main():
    """Runs funlang interpreter. Called from the funlang console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="funlang")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", help="print the syntax tree of each program before running it",
                            action="store_true")
        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
        args = parser.parse_args()

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_ast=args.ast)
            sess.run()

            for value in sess.results:
                print(value)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_ast=args.ast)).cmdloop()


if __name__ == "__main__":
    main()
