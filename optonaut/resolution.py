"""
Optonaut resolution: parse passes and option holders.

Overview
- ParsePass
  • Owns the resolved values of one pass in a side table keyed by descriptor,
    so descriptors stay immutable and reusable.
  • Two phases: every option is finalized first, then every validator runs.
    Validators read sibling values through their context (context.resolved).
    A failing option does not stop its siblings from resolving, but any
    resolution fault skips the validation phase entirely. One OptionExit
    carrying every fault is triggered at the end.

- Resolved
  • Read-only, mapping-like view over a pass. Keys are descriptors or option
    names. Reading an option of the pass that has no value (not resolved yet,
    or failed) raises ResolutionGuardViolation; unknown keys raise KeyError.

- OptionHolder
  • Base class for objects declaring options as class attributes. Declaring
    registers the option (names inferred from the attribute when omitted);
    parse() runs a new pass and exposes its values as attributes.

Example
    >>> class Build(OptionHolder):
    ...     output_dir = option().default("dist")
    ...     jobs = option("-j").integer().default(1)
    >>> build = Build()
    >>> _ = build.parse({"-j": [Invocation("-j", ["4"])]})
    >>> build.output_dir, build.jobs
    ('dist', 4)
"""
import copy
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .context import Context
from .faults import OptionException, OptionExit, ResolutionGuardViolation
from .invocations import Invocation
from .options import OptionDescriptor
from .utils import Unset, coalesce, longest


def infer_option_names(names, attribute, /):
    """
    Return `names` unchanged when non-empty, otherwise the option name derived
    from the attribute: "output_dir" and "outputDir" both give "--output-dir".
    """
    if names:
        return frozenset(names)
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", attribute.strip("_")).lower().split("_")
    if not (name := "-".join(word for word in words if word)):
        raise ValueError("cannot infer an option name from attribute %r" % attribute)
    return frozenset({"--" + name})


class ParsePass:
    """
    One resolution pass over a set of descriptors.

    A pass runs once; run a new pass (they are cheap) to resolve again.
    """

    def __init__(self, context=Unset, /):
        context = coalesce(context, Context())
        if not isinstance(context, Context):
            raise TypeError("parse pass 'context' must be a Context")
        self.context = context
        self._descriptors = []
        self._values = {}
        self._failed = set()
        self._faults = []
        self._done = False

    @property
    def faults(self):
        """Faults collected so far, in the order they happened."""
        return tuple(self._faults)

    @property
    def descriptors(self):
        return tuple(self._descriptors)

    def declare(self, descriptors, /):
        """
        Make `descriptors` part of this pass without resolving them yet, so
        they can be looked up by name (and read, with the guard) right away.
        """
        for descriptor in descriptors:
            if not isinstance(descriptor, OptionDescriptor):
                raise TypeError("declare() arguments must be option descriptors")
            if descriptor not in self._descriptors:
                self._descriptors.append(descriptor)

    def _record(self, descriptor, exception, /):
        self._failed.add(descriptor)
        self._faults.append(exception)

    def finalize(self, descriptor, invocations=(), /):
        """
        Resolve one descriptor and store its value; a fault is recorded instead.
        """
        if not isinstance(descriptor, OptionDescriptor):
            raise TypeError("finalize() argument must be an option descriptor")
        if descriptor in self._values or descriptor in self._failed:
            raise RuntimeError("option %s was already resolved in this pass" % descriptor.longest_name)
        self.declare((descriptor,))
        try:
            value = descriptor.finalize(self.context, invocations)
        except OptionException as exception:
            self._record(descriptor, exception)
        else:
            self._values[descriptor] = value

    def validate(self, descriptor, /):
        """
        Run the validator of a resolved descriptor. Failed descriptors are skipped.
        """
        if descriptor in self._failed:
            return
        if descriptor not in self._values:
            raise ResolutionGuardViolation("option %s cannot be validated before it is resolved" % descriptor.longest_name)
        try:
            descriptor.post_validate(self.context, self._values[descriptor], Resolved(self))
        except OptionException as exception:
            self._record(descriptor, exception)

    def run(self, descriptors, invocations=Unset, /):
        """
        Finalize every descriptor then, when all of them resolved, validate
        every descriptor. An OptionExit is triggered through the context when
        anything failed.

        `invocations` maps descriptors to their invocations (missing keys mean
        "not invoked").
        """
        if self._done:
            raise RuntimeError("a parse pass runs only once")
        self._done = True
        descriptors = tuple(descriptors)
        self.declare(descriptors)
        invocations = coalesce(invocations, {})

        for descriptor in descriptors:
            self.finalize(descriptor, invocations.get(descriptor, ()))
        # Validators may read any sibling, so they only run once every option resolved.
        if not self._faults:
            for descriptor in descriptors:
                self.validate(descriptor)

        if self._faults:
            self.context.trigger(OptionExit(self._faults))
        return Resolved(self)

    def lookup(self, key, /):
        """
        Return the descriptor of this pass matching `key` (a descriptor or any
        of its names), or raise KeyError.
        """
        if isinstance(key, OptionDescriptor):
            if key in self._descriptors:
                return key
        elif isinstance(key, str):
            for descriptor in self._descriptors:
                if key in descriptor.names or key in descriptor.secondary_names:
                    return descriptor
        raise KeyError(key)

    def value(self, descriptor, /):
        try:
            return self._values[descriptor]
        except KeyError:
            raise ResolutionGuardViolation(
                "option %s was read before it was resolved" % descriptor.longest_name
            ) from None

    def __repr__(self):
        return "parse-pass(resolved=%d, failed=%d)" % (len(self._values), len(self._failed))


class Resolved(Mapping):
    """
    Read-only view of the values of a parse pass.
    """
    __slots__ = ("_pass",)

    def __init__(self, parse_pass, /):
        if not isinstance(parse_pass, ParsePass):
            raise TypeError("resolved view must wrap a parse pass")
        self._pass = parse_pass

    def __getitem__(self, key, /):
        return self._pass.value(self._pass.lookup(key))

    def __contains__(self, key, /):
        try:
            self._pass.lookup(key)
        except KeyError:
            return False
        return True

    def __iter__(self):
        return iter(self._pass.descriptors)

    def __len__(self):
        return len(self._pass.descriptors)

    def is_resolved(self, key, /):
        """True when `key` has a value in this pass (so reading it is safe)."""
        try:
            self[key]
        except ResolutionGuardViolation:
            return False
        return True

    @property
    def faults(self):
        return self._pass.faults

    def __repr__(self):
        return "resolved(%s)" % ", ".join(
            "%s=%r" % (descriptor.longest_name, self._pass._values[descriptor])
            for descriptor in self._pass.descriptors
            if descriptor in self._pass._values
        )


class OptionHolder:
    """
    Base class of objects that declare options as class attributes.

    Class attributes
    - __options__: read-only mapping of attribute name → registered descriptor,
      including inherited ones (a subclass attribute replaces its parent's).

    Instances read option values as attributes after parse(); before that, or
    for an option whose resolution failed, reading raises
    ResolutionGuardViolation.
    """
    __options__ = MappingProxyType({})

    @classmethod
    def register_option(cls, attribute, descriptor, /):
        """
        Register `descriptor` under `attribute`, inferring its names when it has
        none, and return the registered descriptor.
        """
        if not isinstance(descriptor, OptionDescriptor):
            raise TypeError("register_option() argument must be an option descriptor")
        if not descriptor.names:
            descriptor = copy.replace(descriptor, names=infer_option_names(descriptor.names, attribute))
            setattr(cls, attribute, descriptor)

        options = dict(cls.__options__)
        options.pop(attribute, None)
        taken = {
            name: other
            for other in options.values()
            for name in other.names | other.secondary_names
        }
        for name in sorted(descriptor.names | descriptor.secondary_names):
            if name in taken:
                raise ValueError("option name %s is already used by %s" % (name, longest(taken[name].names)))
        options[attribute] = descriptor
        cls.__options__ = MappingProxyType(options)
        return descriptor

    @classmethod
    def __read_option__(cls, instance, descriptor, /):
        if (resolution := instance.__dict__.get("__resolution__")) is None:
            raise ResolutionGuardViolation(
                "option %s was read before %s.parse()" % (descriptor.longest_name, cls.__name__)
            )
        return resolution[descriptor]

    @property
    def resolution(self):
        """The Resolved view of the last parse(), or None."""
        return self.__dict__.get("__resolution__")

    def parse(self, invocations=Unset, /, context=Unset):
        """
        Resolve every registered option in a new pass and return its Resolved
        view. The previous pass (if any) is discarded first.

        `invocations` maps descriptors or option names to iterables of
        Invocation; options without an entry were not invoked.
        """
        descriptors = tuple(type(self).__options__.values())
        parse_pass = ParsePass(context)
        resolved = Resolved(parse_pass)
        self.__dict__["__resolution__"] = resolved
        parse_pass.declare(descriptors)

        normalized = {}
        for key, values in coalesce(invocations, {}).items():
            try:
                descriptor = parse_pass.lookup(key)
            except KeyError:
                raise KeyError("unknown option %r" % (key,)) from None
            if isinstance(values, Invocation) or not isinstance(values, Iterable):
                raise TypeError("invocations of %s must be an iterable of Invocation" % descriptor.longest_name)
            values = tuple(values)
            for value in values:
                if not isinstance(value, Invocation):
                    raise TypeError("invocations of %s must be Invocation objects" % descriptor.longest_name)
            normalized[descriptor] = normalized.get(descriptor, ()) + values

        parse_pass.run(descriptors, normalized)
        return resolved


__all__ = (
    "infer_option_names",
    "ParsePass",
    "Resolved",
    "OptionHolder",
)
