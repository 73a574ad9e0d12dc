"""
Optonaut utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the descriptor, pipeline and resolution layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support optonaut.options and optonaut.resolution.

Overview
- UnsetType / Unset
  • Singleton sentinel meaning “not provided”, so None stays a legitimate value
    (an option may well resolve to None).

- coalesce(value, default=None)
  • Replace Unset with a concrete default, keeping None/0/""/[] untouched.

- rename(callable, name) / @rename("name")
  • Give generated stage functions readable __name__/__qualname__ for tracebacks.

- freeze(object)
  • Shallow read-only snapshot of a container (tuple / MappingProxyType / frozenset).

- view("attr")
  • Read-only property over a private backing field, returning frozen snapshots.

- longest(names)
  • Pick the display name of an option (longest name, ties broken alphabetically).

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> freeze({"a": 1})["a"]
    1
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a per-process singleton.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `object` unless it is Unset, in which case return `default`.

    Falsey values like None, 0, "" or [] are preserved: only the sentinel is
    replaced.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name) -> decorator

    Stage functions built by the option builders are closures; renaming them
    keeps tracebacks pointing at "integer" or "multiple" instead of
    "OptionDescriptor.integer.<locals>.transform".
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def freeze(object, /):
    """
    Return a shallow, read-only snapshot of a container.

    - Sequence (non-string, non-range) → tuple
    - Mapping → MappingProxyType over a fresh dict
    - Set → frozenset
    - anything else → returned as-is

    Freezing is shallow: nested containers keep their own mutability.
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray, range)):
        return tuple(object)
    elif isinstance(object, MappingProxyType):
        return object
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def view(name, /):
    """
    Define a read-only property over the backing attribute "_{name}".

    The backing value is frozen on every read, so the public attribute can never
    be used to mutate the instance it belongs to.
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")

    @rename(name)
    def getter(self):
        return freeze(getattr(self, "_" + name))

    return property(getter)


def longest(names, /):
    """
    Return the longest name of a collection (alphabetical order breaks ties).

    Returns None for an empty collection.
    """
    return max(sorted(names), key=len, default=None)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use it as a parameter default when None is a valid, user-meaningful value;
materialize with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "freeze",
    "view",
    "longest",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
