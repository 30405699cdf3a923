"""Runtime values and the symbol table for the zr language."""

import contextlib
import enum
import logging

from zr.lang.error import RuntimeValueError


logger = logging.getLogger(__name__)


class ValueType(enum.Enum):
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    VOID = "void"

    @property
    def is_numeric(self):
        return self in (ValueType.INT32, ValueType.INT64, ValueType.FLOAT)

    def __str__(self):
        return self.value


class Value:
    """Typed runtime value. Never mutated after creation, so reading a variable hands out the stored Value itself."""
    __slots__ = ("type", "data")

    def __init__(self, value_type, data=None):
        self.type = value_type
        self.data = data

    def render(self):
        """Returns text that print outputs for this value."""
        if self.type in (ValueType.INT32, ValueType.INT64):
            return str(self.data)
        elif self.type is ValueType.FLOAT:
            return "%.2f" % self.data
        elif self.type is ValueType.BOOL:
            return "true" if self.data else "false"
        elif self.type is ValueType.STRING:
            return self.data
        return "void"

    def __repr__(self):
        return f"Value({self.type.name}, {self.data!r})"

    def __eq__(self, other):
        return isinstance(other, Value) and other.type is self.type and other.data == self.data

    def __hash__(self):
        return hash((self.type, self.data))


VOID = Value(ValueType.VOID)


class SymbolTable:
    """Binding store for variables. By default there is a single flat, global scope: a let anywhere (including
    inside nested blocks and included modules) overwrites the one binding of that name. With scoped=True, blocks
    push a new scope, let binds in the innermost one and lookups walk outwards.
    """

    def __init__(self, scoped=False):
        self.scoped = scoped
        self.scopes = [{}]

    @contextlib.contextmanager
    def scope(self):
        """Pushes a scope for the duration of the with block. No-op unless scoped."""
        if not self.scoped:
            yield
            return

        self.scopes.append({})
        try:
            yield
        finally:
            self.scopes.pop()

    def define(self, name, value):
        """Binds name to value in the innermost scope, overwriting any previous value there."""
        if name in self.scopes[-1]:
            logger.debug("rebinding '%s' to %r", name, value)
        self.scopes[-1][name] = value

    def lookup(self, name, at=None):
        """Returns value bound to name. Raises RuntimeValueError if name is not bound."""
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise RuntimeValueError("undefined variable '{}'", name, at=at)

    def __contains__(self, name):
        return any(name in scope for scope in self.scopes)

    def __len__(self):
        return len({name for scope in self.scopes for name in scope})
