"""Runtime values. Every value is immutable; the language never observes identity, only type and payload."""

import math
from dataclasses import dataclass


class RuntimeValue:
    """Superclass of all values. type_name is the name used in error messages."""
    type_name = "value"
    value = None


@dataclass(frozen=True)
class NullValue(RuntimeValue):
    type_name = "null"
    value: None = None

    def __str__(self):
        return "null"


@dataclass(frozen=True)
class NumberValue(RuntimeValue):
    type_name = "number"
    value: float = 0.0

    def __str__(self):
        return format_number(self.value)


@dataclass(frozen=True)
class StringValue(RuntimeValue):
    type_name = "string"
    value: str = ""

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class BooleanValue(RuntimeValue):
    type_name = "bool"
    value: bool = False

    def __str__(self):
        return "true" if self.value else "false"


def format_number(num):
    """Renders num the way it is displayed and concatenated: integral values have no fractional part."""
    if math.isnan(num):
        return "NaN"
    elif math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    elif num.is_integer():
        return str(int(num))
    return repr(num)


def make_null():
    return NullValue()


def make_number(num=0.0):
    return NumberValue(float(num))


def make_string(text=""):
    return StringValue(text)


def make_boolean(value=False):
    return BooleanValue(bool(value))
