"""Lexical scopes. A scope maps names to values, remembers which of them are constant, and defers to its parent for
names it does not declare itself.
"""

import math

from funlang import __version__
from funlang.lang.error import ConstantError, DuplicateDeclarationError, UnknownSymbolError
from funlang.runtime.values import make_boolean, make_null, make_number, make_string


RESERVED_NAMES = ("true", "false", "null")


class Environment:

    def __init__(self, parent=None):
        self.parent = parent
        self.variables = {}
        self.constants = set()

    def declare(self, name, value, constant=False):
        """Declares name in this scope and returns value. A name can only be declared once per scope."""
        if name in self.variables:
            raise DuplicateDeclarationError("variable '{}' is already declared", name)

        self.variables[name] = value
        if constant:
            self.constants.add(name)

        return value

    def assign(self, name, value):
        """Rebinds name in the scope that declares it and returns value."""
        env = self.resolve(name)

        if name in env.constants:
            raise ConstantError("constant '{}' cannot be reassigned", name)

        env.variables[name] = value
        return value

    def lookup(self, name):
        return self.resolve(name).variables[name]

    def resolve(self, name):
        """Returns the innermost scope (self included) that declares name."""
        env = self
        while env is not None:
            if name in env.variables:
                return env
            env = env.parent

        raise UnknownSymbolError("symbol '{}' was not declared", name)

    def __contains__(self, name):
        try:
            self.resolve(name)
        except UnknownSymbolError:
            return False
        return True


def create_global_environment(version=__version__):
    """Returns a root Environment with the built-in constants installed."""
    env = Environment()

    env.declare("pi", make_number(math.pi), True)
    env.declare("e", make_number(math.e), True)
    env.declare("version", make_string(version), True)
    env.declare("true", make_boolean(True), True)
    env.declare("false", make_boolean(False), True)
    env.declare("null", make_null(), True)

    return env
