"""
Where an option's raw values come from.

Origins
- Direct(invocations)     the option appeared on the command line
- Sourced(invocations)    a value source (config file, mapping) supplied values
- EnvFallback(name, raw)  the option's environment variable is set
- Absent                  nothing supplied a value

resolve_origin() picks exactly one of them, strictly in that priority order.
split_origin() then applies the option's split pattern and returns the
invocations the pipeline converts. Sourced values are never split: a value
source returns values that are already structured (a TOML array is already a
list), while command-line and environment values are single strings the user
typed.

Value sources
- MapValueSource: nested mapping, looked up by dotted key.
- TomlValueSource: a TOML document (parsed with tomlkit), looked up like a map.
- ChainedValueSource: the first source with a hit wins.
"""
import re
from collections.abc import Mapping

import tomlkit
from tomlkit.exceptions import ParseError
from rich.text import Text

from .invocations import Invocation
from .utils import Unset, longest


class Direct:
    __slots__ = ("invocations",)
    __match_args__ = ("invocations",)

    def __init__(self, invocations, /):
        self.invocations = tuple(invocations)

    def __eq__(self, other):
        return isinstance(other, Direct) and self.invocations == other.invocations

    __hash__ = None

    def __repr__(self):
        return "direct(%r)" % list(self.invocations)


class Sourced:
    __slots__ = ("invocations",)
    __match_args__ = ("invocations",)

    def __init__(self, invocations, /):
        self.invocations = tuple(invocations)

    def __eq__(self, other):
        return isinstance(other, Sourced) and self.invocations == other.invocations

    __hash__ = None

    def __repr__(self):
        return "sourced(%r)" % list(self.invocations)


class EnvFallback:
    __slots__ = ("name", "value")
    __match_args__ = ("name", "value")

    def __init__(self, name, value, /):
        self.name = name
        self.value = value

    def __eq__(self, other):
        return isinstance(other, EnvFallback) and (self.name, self.value) == (other.name, other.value)

    __hash__ = None

    def __repr__(self):
        return "env-fallback(%r, %r)" % (self.name, self.value)


# Singleton origin for "nothing supplied a value".
Absent = type("absent-type", (), {
    "__module__": __name__,
    "__slots__": (),
    "__repr__": lambda self: "absent",
    "__rich__": lambda self: Text("absent", style="dim"),
    "__bool__": lambda self: False,
    "__doc__": "origin selected when no invocation, source entry or environment variable exists",
})()


def resolve_origin(context, descriptor, invocations, /):
    """
    Select where the value of `descriptor` comes from.

    Priority (the first match wins, later branches are never evaluated)
    1. non-empty `invocations` → Direct
    2. a value source has entries for the descriptor → Sourced
    3. descriptor.envvar is set and present in the environment (an empty string
       counts as present) → EnvFallback
    4. Absent
    """
    if invocations := tuple(invocations):
        return Direct(invocations)
    if sourced := context.values(descriptor):
        return Sourced(sourced)
    if descriptor.envvar is not None and (value := context.getenv(descriptor.envvar)) is not None:
        return EnvFallback(descriptor.envvar, value)
    return Absent


def _split(pattern, value, /):
    """
    Internal: split `value` on `pattern`, leaving out the text of capture
    groups (re.split interleaves them with the parts).
    """
    parts = pattern.split(value)
    return parts[::pattern.groups + 1]


def split_origin(origin, pattern=None, /):
    """
    Turn an origin into the list of invocations fed to the pipeline.

    - Direct: each invocation's values are split element-wise by `pattern` and
      flattened; names and order are kept.
    - Sourced: returned unchanged (never split).
    - EnvFallback: one invocation named after the variable, holding the split
      result (or the raw string when there is no pattern).
    - Absent: no invocations.
    """
    match origin:
        case Direct(invocations=invocations):
            if pattern is None:
                return list(invocations)
            return [
                Invocation(invocation.name, [part for value in invocation.values for part in _split(pattern, value)])
                for invocation in invocations
            ]
        case Sourced(invocations=invocations):
            return list(invocations)
        case EnvFallback(name=name, value=value):
            return [Invocation(name, _split(pattern, value) if pattern is not None else [value])]
        case _ if origin is Absent:
            return []
    raise TypeError("split_origin() argument must be an origin, not %r" % type(origin).__name__)


class ValueSource:
    """
    Base class of value sources.

    Subclasses implement get_values(context, descriptor) and return the
    invocations to use (one per value for scalar entries), or an empty list.
    """

    def get_values(self, context, descriptor, /):
        raise NotImplementedError

    @staticmethod
    def key(descriptor, /):
        """
        The lookup key of `descriptor`: its source_key, or its longest name
        without the leading punctuation ("--dry-run" → "dry-run").
        """
        if descriptor.source_key is not None:
            return descriptor.source_key
        return re.sub(r"^[^\w]+", "", longest(descriptor.names) or "")

    @staticmethod
    def invocations(value, descriptor=None, /):
        """
        Convert a looked-up value into invocations.

        - list/tuple of scalars → one invocation holding every element when the
          descriptor takes several values per invocation (split(), pair(), ...),
          otherwise one invocation per element
        - list/tuple containing lists → one invocation per element; nested
          lists become multi-value invocations
        - bool → "true"/"false"
        - anything else → str(value)
        """
        def text(value):
            if isinstance(value, bool):
                return "true" if value else "false"
            return str(value)

        if isinstance(value, list | tuple):
            nested = any(isinstance(item, list | tuple) for item in value)
            if not nested and descriptor is not None and descriptor.nvalues.stop - 1 > 1:
                return [Invocation("", list(map(text, value)))]
            return [
                Invocation("", list(map(text, item))) if isinstance(item, list | tuple) else Invocation.just(text(item))
                for item in value
            ]
        return [Invocation.just(text(value))]


class MapValueSource(ValueSource):
    """
    Values from a (possibly nested) mapping.

    Keys are looked up verbatim first, then as dotted paths into nested
    mappings ("server.port" → values["server"]["port"]). When `normalize` is
    true, "-" in keys is also tried as "_".
    """

    def __init__(self, values, /, *, normalize=True):
        self._values = values
        self._normalize = bool(normalize)

    def _lookup(self, key):
        if key in self._values:
            return self._values[key]
        node = self._values
        for part in key.split("."):
            if not hasattr(node, "get") or (node := node.get(part, Unset)) is Unset:
                return Unset
        return node

    def get_values(self, context, descriptor, /):
        key = self.key(descriptor)
        value = self._lookup(key)
        if value is Unset and self._normalize and "-" in key:
            value = self._lookup(key.replace("-", "_"))
        if value is Unset or value is None:
            return []
        return self.invocations(value, descriptor)

    def __repr__(self):
        return "map-value-source(%d keys)" % len(self._values)


class TomlValueSource(MapValueSource):
    """
    Values from a TOML document, optionally rooted at a table ("tool.myapp").

    Use TomlValueSource.from_file(path) to read a file; a missing file yields an
    empty source when `required` is false.
    """

    def __init__(self, document, /, *, root=Unset, normalize=True):
        if isinstance(document, str):
            try:
                document = tomlkit.parse(document)
            except ParseError as exception:
                raise ValueError("invalid TOML document: %s" % exception) from None
        values = document.unwrap() if hasattr(document, "unwrap") else dict(document)
        if root is not Unset:
            for part in root.split("."):
                values = values.get(part, {}) if isinstance(values, Mapping) else {}
            if not isinstance(values, Mapping):
                values = {}
        super().__init__(values, normalize=normalize)

    @classmethod
    def from_file(cls, path, /, *, root=Unset, required=False, normalize=True):
        try:
            with open(path, encoding="utf-8") as file:
                return cls(file.read(), root=root, normalize=normalize)
        except FileNotFoundError:
            if required:
                raise
            return cls("", root=root, normalize=normalize)


class ChainedValueSource(ValueSource):
    """
    Ask several sources in order; the first non-empty answer wins.
    """

    def __init__(self, *sources):
        self._sources = sources

    def get_values(self, context, descriptor, /):
        for source in self._sources:
            if invocations := list(source.get_values(context, descriptor)):
                return invocations
        return []

    def __repr__(self):
        return "chained-value-source(%r)" % list(self._sources)


__all__ = (
    "Direct",
    "Sourced",
    "EnvFallback",
    "Absent",
    "resolve_origin",
    "split_origin",
    "ValueSource",
    "MapValueSource",
    "TomlValueSource",
    "ChainedValueSource",
)
