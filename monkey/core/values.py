"""Runtime values produced by the evaluator. TRUE, FALSE and NULL are singletons and are compared by identity."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from monkey.core.syntax import FunctionLiteral


class Value(ABC):
    """Superclass of every runtime value."""

    @abstractmethod
    def inspect(self):
        """Canonical textual form of this value, as printed by the shell."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Value):
    value: int

    def inspect(self):
        return f"INTEGER<{self.value}>"


class Boolean(Value):

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return f"BOOLEAN<{'true' if self.value else 'false'}>"

    def __repr__(self):
        return f"Boolean({self.value})"


class Null(Value):
    value = None

    def inspect(self):
        return "NULL"

    def __repr__(self):
        return "Null()"


@dataclass(frozen=True)
class ReturnValue(Value):
    """Wraps the value of a return statement while it escapes enclosing blocks. Unwrapped at the call boundary (or at
    the program level), so it is never the result of a whole program.
    """
    inner: Value

    def inspect(self):
        return f"RETURN_VALUE<{self.inner.inspect()}>"


@dataclass(frozen=True, eq=False)
class Function(Value):
    """Closure: a function literal together with the environment that was active where it was evaluated. The
    environment is shared, not copied, so the function sees later bindings made in its defining scope.
    """
    literal: FunctionLiteral
    environment: object

    @property
    def parameters(self):
        return self.literal.parameters

    @property
    def body(self):
        return self.literal.body

    def inspect(self):
        return f"FUNCTION<{self.literal.signature}>"

    def __repr__(self):
        return f"Function({self.literal.signature})"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def to_boolean(value):
    """Returns the Boolean singleton for the Python bool value."""
    return TRUE if value else FALSE


def is_truthy(value):
    """FALSE and NULL are falsy, everything else (including INTEGER<0>) is truthy."""
    return value is not FALSE and value is not NULL
