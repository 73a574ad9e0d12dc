"""
Invocation records.

An Invocation is what the (external) tokenizer hands over for one occurrence
of an option on the command line: the name the user typed and the raw string
values captured for it. `--name a b --name=c` yields two invocations,
Invocation("--name", ("a", "b")) and Invocation("--name", ("c",)).

Invocations are immutable value objects: equal when name and values are equal,
hashable, and copyable with copy.replace(invocation, values=...).
"""
from collections.abc import Iterable

from rich.text import Text


class Invocation:
    """
    One occurrence of an option: the name used and its raw values, in order.

    Invocations built from an environment variable carry the variable's name;
    invocations read from a value source carry an empty name.
    """
    __slots__ = ("_name", "_values")

    def __init__(self, name, values=(), /):
        if not isinstance(name, str):
            raise TypeError("invocation name must be a string")
        if isinstance(values, str) or not isinstance(values, Iterable):
            raise TypeError("invocation values must be an iterable of strings")
        values = tuple(values)
        for value in values:
            if not isinstance(value, str):
                raise TypeError("invocation values must be strings")
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_values", values)

    @classmethod
    def just(cls, value, /):
        """Build an anonymous invocation carrying a single value."""
        return cls("", (value,))

    @property
    def name(self):
        return self._name

    @property
    def values(self):
        return self._values

    def __setattr__(self, name, value, /):
        raise AttributeError("invocations are immutable")

    def __delattr__(self, name, /):
        raise AttributeError("invocations are immutable")

    def __eq__(self, other):
        if not isinstance(other, Invocation):
            return NotImplemented
        return self._name == other._name and self._values == other._values

    def __hash__(self):
        return hash((self._name, self._values))

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __repr__(self):
        return "invocation(name=%r, values=%r)" % (self._name, list(self._values))

    def __rich__(self):
        return Text.assemble((self._name or "(anonymous)", "bold"), " ", repr(list(self._values)))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        if unknown := overrides.keys() - {"name", "values"}:
            raise TypeError("unexpected invocation fields: %s" % ", ".join(sorted(unknown)))
        return type(self)(overrides.get("name", self._name), overrides.get("values", self._values))

    def __reduce__(self):
        return type(self), (self._name, self._values)


__all__ = (
    "Invocation",
)
