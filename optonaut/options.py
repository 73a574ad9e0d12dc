r"""
Optonaut option descriptors and their transform pipeline.

Overview
- Pipeline
  • Immutable bundle of the stages that turn raw strings into the option value:
      transform_value(call, raw)      -> ValueT   once per raw string
      transform_each(call, values)    -> EachT    once per invocation
      transform_all(option, eaches)   -> AllT     once per option
      missing(option)                 -> AllT     instead of all three, when no
                                                  origin supplied anything
      validator(option, value)        -> None     after every option resolved
  • Stages are only ever replaced together (see OptionDescriptor.retype), so the
    output type of one stage always matches the input type of the next.

- OptionDescriptor[AllT, EachT, ValueT]
  • Immutable configuration of one option (names, arity, environment variable,
    split pattern, value-source key, help metadata, pipeline).
  • copy(**overrides) keeps the pipeline; retype(...) swaps it as a whole.
  • Builders (integer(), multiple(), default(), deprecated(), ...) are thin
    layers over copy()/retype(), each returning a new descriptor.
  • Descriptors never store resolved values: a parse pass keeps them in its own
    side table (optonaut.resolution), so one descriptor can serve many passes.

- option(*names, ...)
  • Factory of raw string options: last occurrence wins, None when absent.

Builder ordering
- Value converters (convert, integer, floating, boolean, choice) come first,
  then the per-invocation shape (transform_values, pair, triple, split), then
  the aggregate (multiple, unique, default, default_lazy, required), then
  validation (validate, check) and finally deprecated(). Calling a builder
  after a later stage was customized raises TypeError instead of silently
  discarding that customization.

Quick example:
    >>> from optonaut import option, OptionHolder
    >>> class Tool(OptionHolder):
    ...     threads = option(help="worker threads").integer().default(1)
    ...     tags = option("-t", "--tag").multiple()
    ...     legacy = option().deprecated("--legacy is going away")
"""
import copy
import functools
import operator
import re
import sys
from collections.abc import Iterable, Mapping
from contextlib import contextmanager

from .completion import CompletionCandidates
from .context import OptionCallContext, OptionContext
from .faults import (
    BadValueError,
    DeprecatedOptionError,
    DeprecatedOptionWarning,
    FailedValidationError,
    InvalidArityError,
    InvalidChoiceError,
    MissingOptionError,
    OptionException,
)
from .sources import Absent, resolve_origin, split_origin
from .utils import *

_NAME = re.compile(r"[^\w\s]+[^\W\d_]\w*(-\w+)*")


@rename("string")
def default_value(context, value, /):
    return value


@rename("single")
def default_each(context, values, /):
    if len(values) != 1:
        context.fail(context.localization.invalid_arity(len(values), range(1, 2)), error=InvalidArityError)
    return values[0]


@rename("last")
def default_all(context, values, /):
    return values[-1] if values else None


@rename("none")
def default_missing(context, /):
    return None


@rename("accept")
def default_validator(context, value, /):
    return None


class Pipeline:
    """
    The five stage functions of an option, replaced only as one unit.
    """
    __slots__ = ("transform_value", "transform_each", "transform_all", "missing", "validator")

    def __init__(self, transform_value, transform_each, transform_all, validator, missing=default_missing, /):
        for name, stage in (
                ("transform_value", transform_value),
                ("transform_each", transform_each),
                ("transform_all", transform_all),
                ("validator", validator),
                ("missing", missing),
        ):
            if not callable(stage):
                raise TypeError("pipeline %r must be callable" % name)
            object.__setattr__(self, name, stage)

    def __setattr__(self, name, value, /):
        raise AttributeError("pipelines are immutable")

    def is_default(self, *stages):
        """
        Return True when every named stage is still the library default.
        """
        defaults = {
            "transform_value": default_value,
            "transform_each": default_each,
            "transform_all": default_all,
            "missing": default_missing,
            "validator": default_validator,
        }
        return all(getattr(self, stage) is defaults[stage] for stage in stages)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        if unknown := overrides.keys() - set(type(self).__slots__):
            raise TypeError("unexpected pipeline stages: %s" % ", ".join(sorted(unknown)))
        stages = {name: getattr(self, name) for name in type(self).__slots__} | overrides
        return type(self)(
            stages["transform_value"],
            stages["transform_each"],
            stages["transform_all"],
            stages["validator"],
            stages["missing"],
        )

    def __repr__(self):
        return "pipeline(%s)" % " → ".join(getattr(getattr(self, name), "__name__", "?") for name in (
            "transform_value", "transform_each", "transform_all", "validator"
        ))


class DescriptorType(type):
    """
    Metaclass exposing the fields listed in __introspectable__ as read-only
    properties over "_{field}" backing attributes, with a stable __repr__ and
    __rich_repr__ built from them.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: view(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in ("names", "nvalues", "envvar", "value_split", "source_key", "hidden"):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, names, field, /):
    """
    Internal: validate option names (shell-style, unicode letters allowed) and
    normalize them into a frozenset. Duplicates are rejected.
    """
    if isinstance(names, str) or not isinstance(names, Iterable):
        raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of strings")
    sanitized = set()
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} '{field}' must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} '{field}' cannot be empty-strings")
        elif not _NAME.fullmatch(name):
            raise ValueError(f"{cls.__typename__} '{field}' must be valid shell-style option names, got {name!r}")
        elif name in sanitized:
            raise ValueError(f"{cls.__typename__} '{field}' cannot contain duplicates")
        sanitized.add(name)
    return frozenset(sanitized)


def _sanitize_nvalues(cls, nvalues, /):
    """
    Internal: an int n means exactly n values; a range must be contiguous,
    non-negative and non-empty.
    """
    if isinstance(nvalues, bool) or not isinstance(nvalues, int | range):
        raise TypeError(f"{cls.__typename__} 'nvalues' must be an integer or a range")
    if isinstance(nvalues, int):
        nvalues = range(nvalues, nvalues + 1)
    if nvalues.step != 1:
        raise ValueError(f"{cls.__typename__} 'nvalues' must be a contiguous range")
    if nvalues.start < 0 or not nvalues:
        raise ValueError(f"{cls.__typename__} 'nvalues' must be a non-empty, non-negative range")
    return nvalues


def _sanitize(cls, fields, /):
    """
    Internal: validate and normalize every non-pipeline field in place.
    """
    fields["names"] = _sanitize_names(cls, fields["names"], "names")
    fields["secondary_names"] = _sanitize_names(cls, fields["secondary_names"], "secondary_names")
    if overlap := fields["names"] & fields["secondary_names"]:
        raise ValueError(f"{cls.__typename__} names and secondary names overlap: {", ".join(sorted(overlap))}")

    fields["nvalues"] = _sanitize_nvalues(cls, fields["nvalues"])

    for field in ("envvar", "source_key"):
        if not isinstance(value := fields[field], str | None):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        elif isinstance(value, str) and not value.strip():
            raise ValueError(f"{cls.__typename__} '{field}' cannot be empty")

    if isinstance(split := fields["value_split"], str):
        if not split:
            raise ValueError(f"{cls.__typename__} 'value_split' cannot be empty")
        fields["value_split"] = re.compile(split)
    elif not isinstance(split, re.Pattern | None):
        raise TypeError(f"{cls.__typename__} 'value_split' must be a string or a compiled pattern")

    if not isinstance(fields["help_text"], str):
        raise TypeError(f"{cls.__typename__} 'help_text' must be a string")

    if not isinstance(tags := fields["help_tags"], Mapping):
        raise TypeError(f"{cls.__typename__} 'help_tags' must be a mapping")
    for key, value in tags.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(f"{cls.__typename__} 'help_tags' keys and values must be strings")
    fields["help_tags"] = freeze(tags)

    if (getter := fields["metavar_getter"]) is not None and not callable(getter):
        raise TypeError(f"{cls.__typename__} 'metavar_getter' must be callable")

    if not isinstance(fields["explicit_completion_candidates"], CompletionCandidates | None):
        raise TypeError(f"{cls.__typename__} 'completion_candidates' must be CompletionCandidates")

    for field in ("hidden", "accepts_number_value_without_name", "accepts_unattached_value"):
        fields[field] = bool(fields[field])

    if not isinstance(fields["pipeline"], Pipeline):
        raise TypeError(f"{cls.__typename__} 'pipeline' must be a Pipeline")


@contextmanager
def _naming(context, /):
    """
    Internal: fill in the option name of faults raised by stage functions that
    did not know which option they served.
    """
    try:
        yield
    except OptionException as exception:
        if exception.option:
            raise
        raise copy.replace(exception, option=context.display_name) from None


class OptionDescriptor[AllT, EachT, ValueT](metaclass=DescriptorType):
    """
    Immutable configuration of a named, value-bearing option.

    Properties
    - The names listed in __introspectable__ are read-only attributes; containers
      come back frozen (frozenset, MappingProxyType).

    Resolution
    - finalize(context, invocations) runs origin selection, splitting and the
      value/each/all stages, and returns the value. It stores nothing.
    - post_validate(context, value, resolved) runs the validator.
    Both are driven by optonaut.resolution.ParsePass, which owns the values.

    Declaration
    - As a class attribute of an OptionHolder, the descriptor registers itself
      (names inferred from the attribute when none were given) and reading the
      attribute on an instance returns the value of the last parse pass.
    """

    __introspectable__ = (
        "names",
        "secondary_names",
        "nvalues",
        "envvar",
        "value_split",
        "source_key",
        "help_text",
        "hidden",
        "help_tags",
        "metavar_getter",
        "explicit_completion_candidates",
        "accepts_number_value_without_name",
        "accepts_unattached_value",
        "pipeline",
    )

    # Fields that copy() may override; "validator" is the only pipeline stage among them.
    __overridable__ = (
        "validator",
        "names",
        "secondary_names",
        "nvalues",
        "envvar",
        "value_split",
        "source_key",
        "help_text",
        "hidden",
        "help_tags",
        "metavar_getter",
        "completion_candidates",
        "accepts_number_value_without_name",
        "accepts_unattached_value",
    )

    def __new__(cls, *unused, **fields):
        if unused:
            raise TypeError(f"{cls.__typename__} takes keyword arguments only; use option() to build one")
        if missing := set(cls.__introspectable__) - fields.keys():
            raise TypeError(f"{cls.__typename__} missing fields: {", ".join(sorted(missing))}")
        if unknown := fields.keys() - set(cls.__introspectable__):
            raise TypeError(f"{cls.__typename__} unexpected fields: {", ".join(sorted(unknown))}")
        _sanitize(cls, fields)

        self = super().__new__(cls)
        for name, value in fields.items():
            object.__setattr__(self, "_" + name, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable; use copy() or retype()")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def _fields(self):
        return {name: getattr(self, "_" + name) for name in type(self).__introspectable__}

    # --- introspection ---------------------------------------------------

    @property
    def longest_name(self):
        return longest(self._names)

    @property
    def completion_candidates(self):
        return coalesce(self._explicit_completion_candidates or Unset, CompletionCandidates.NONE)

    def metavar(self, context, /):
        """
        The metavar shown in help: the configured getter's answer, or the
        localized "text" metavar.
        """
        if self._metavar_getter is None:
            return context.localization.string_metavar()
        return self._metavar_getter(context)

    # --- copies ----------------------------------------------------------

    def copy(self, **overrides):
        """
        Return a new descriptor with the same pipeline and the given fields replaced.

        Accepted keywords are listed in __overridable__; "validator" replaces the
        validator stage (it is the only stage whose type does not change).
        """
        if unknown := overrides.keys() - set(type(self).__overridable__):
            raise TypeError(f"copy() got unexpected fields: {", ".join(sorted(unknown))}; use retype() to change stages")
        fields = self._fields()
        if "validator" in overrides:
            fields["pipeline"] = copy.replace(fields["pipeline"], validator=overrides.pop("validator"))
        if "completion_candidates" in overrides:
            fields["explicit_completion_candidates"] = overrides.pop("completion_candidates")
        return type(self)(**fields | overrides)

    def retype(self, transform_value, transform_each, transform_all, validator, /, *, missing=default_missing, **overrides):
        """
        Return a new descriptor whose whole pipeline is replaced.

        All four stages are required: swapping one stage alone could leave its
        neighbours expecting a different type. `missing` completes the all stage
        for the case where no origin supplied a value.
        """
        if "validator" in overrides:
            raise TypeError("retype() takes the validator positionally")
        pipeline = Pipeline(transform_value, transform_each, transform_all, validator, missing)
        return self.copy(**overrides)._with_pipeline(pipeline)

    def _with_pipeline(self, pipeline, /):
        return type(self)(**self._fields() | {"pipeline": pipeline})

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return self.copy(**overrides)

    def __copy__(self):
        return self.copy()

    # --- resolution ------------------------------------------------------

    def finalize(self, context, invocations=(), /):
        """
        Resolve the option value from `invocations` (or a value source, or the
        environment) through the pipeline and return it.
        """
        option = OptionContext(self, context)
        origin = resolve_origin(context, self, invocations)
        if origin is Absent:
            with _naming(option):
                return self._pipeline.missing(option)

        eaches = [self._transform_invocation(context, invocation) for invocation in split_origin(origin, self._value_split)]
        with _naming(option):
            return self._pipeline.transform_all(option, eaches)

    def _transform_invocation(self, context, invocation, /):
        call = OptionCallContext(invocation.name, self, context)
        with _naming(call):
            if len(invocation.values) not in self._nvalues:
                call.fail(context.localization.invalid_arity(len(invocation.values), self._nvalues), error=InvalidArityError)
            values = [self._pipeline.transform_value(call, value) for value in invocation.values]
            return self._pipeline.transform_each(call, values)

    def post_validate(self, context, value, resolved=None, /):
        """
        Run the validator over an already resolved value. `resolved` (the
        Resolved view of the pass) is exposed to the validator as
        context.resolved.
        """
        option = OptionContext(self, context, resolved)
        with _naming(option):
            self._pipeline.validator(option, value)

    # --- declaration -----------------------------------------------------

    def __set_name__(self, owner, name):
        if not callable(register := getattr(owner, "register_option", None)):
            raise TypeError(f"{type(self).__typename__} {name!r} must be declared on an OptionHolder")
        register(name, self)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return type(instance).__read_option__(instance, self)

    def __set__(self, instance, value):
        raise AttributeError(f"option {self.longest_name} is read-only; its value comes from parse()")

    # --- builders ----------------------------------------------------------

    def _require(self, builder, *stages):
        if not self._pipeline.is_default(*stages):
            raise TypeError(f"{builder}() must be called before the option's {", ".join(stages)} stage is customized")

    def help(self, help, /):
        """Return a copy with different help text."""
        return self.copy(help_text=help)

    def _convert(self, builder, conversion, metavar_getter, completion_candidates, /):
        self._require(builder, "transform_each", "transform_all", "missing", "validator")
        previous = self._pipeline.transform_value

        @rename(builder)
        def transform(context, value):
            return conversion(context, previous(context, value))

        return self.copy(
            metavar_getter=coalesce(metavar_getter, self._metavar_getter),
            completion_candidates=coalesce(completion_candidates, self._explicit_completion_candidates),
        )._with_pipeline(Pipeline(transform, default_each, default_all, default_validator, default_missing))

    def convert(self, conversion, /, *, metavar=Unset, completion_candidates=Unset):
        """
        Convert every value with `conversion(value)`.

        ValueError and TypeError raised by the conversion become BadValueError
        with the conversion's message; OptionException passes through (its option
        name filled in when missing).
        """
        if not callable(conversion):
            raise TypeError("convert() argument must be callable")

        def wrapped(context, value):
            try:
                return conversion(value)
            except OptionException:
                raise
            except (ValueError, TypeError) as exception:
                context.fail(str(exception))

        getter = Unset if metavar is Unset else rename(lambda context: metavar, "metavar")
        return self._convert("convert", wrapped, getter, completion_candidates)

    def integer(self, /):
        """Convert values to int."""
        def conversion(context, value):
            try:
                return int(value)
            except ValueError:
                context.fail(context.localization.invalid_integer(value))

        return self._convert("integer", conversion, lambda context: context.localization.int_metavar(), Unset)

    def floating(self, /):
        """Convert values to float."""
        def conversion(context, value):
            try:
                return float(value)
            except ValueError:
                context.fail(context.localization.invalid_float(value))

        return self._convert("floating", conversion, lambda context: context.localization.float_metavar(), Unset)

    def boolean(self, /):
        """Convert "true/false", "yes/no", "on/off" and "1/0" (any case) to bool."""
        def conversion(context, value):
            match value.strip().lower():
                case "true" | "yes" | "on" | "1" | "y" | "t":
                    return True
                case "false" | "no" | "off" | "0" | "n" | "f":
                    return False
            context.fail(context.localization.invalid_boolean(value))

        return self._convert("boolean", conversion, lambda context: context.localization.bool_metavar(), Unset)

    def choice(self, *choices, ignore_case=False):
        """
        Restrict values to `choices`. Pass a single mapping to translate each
        accepted string into another object.
        """
        if len(choices) == 1 and isinstance(choices[0], Mapping):
            mapping = dict(choices[0])
        else:
            mapping = {choice: choice for choice in choices}
        if not mapping:
            raise ValueError("choice() requires at least one choice")
        for key in mapping:
            if not isinstance(key, str):
                raise TypeError("choice() keys must be strings")
        lookup = {(key.lower() if ignore_case else key): value for key, value in mapping.items()}

        def conversion(context, value):
            try:
                return lookup[value.lower() if ignore_case else value]
            except KeyError:
                context.fail(context.localization.invalid_choice(value, list(mapping)), error=InvalidChoiceError)

        return self._convert(
            "choice",
            conversion,
            rename(lambda context: "[%s]" % "|".join(mapping), "metavar"),
            CompletionCandidates.fixed(*mapping),
        )

    def transform_values(self, nvalues, transform, /):
        """
        Accept `nvalues` values per invocation and reduce them with
        transform(call_context, values).
        """
        self._require("transform_values", "transform_each", "transform_all", "missing", "validator")
        return self.retype(
            self._pipeline.transform_value,
            transform,
            default_all,
            default_validator,
            nvalues=nvalues,
        )

    def pair(self, /):
        """Two values per invocation, as a tuple."""
        return self.transform_values(2, rename(lambda context, values: (values[0], values[1]), "pair"))

    def triple(self, /):
        """Three values per invocation, as a tuple."""
        return self.transform_values(3, rename(lambda context, values: (values[0], values[1], values[2]), "triple"))

    def split(self, pattern, /, *, limit=Unset):
        """
        Split every raw value on `pattern` (a string regex or a compiled
        pattern); each invocation becomes a list. The arity check then counts the
        split parts: at least one, at most `limit` when given.
        """
        self._require("split", "transform_each", "transform_all", "missing", "validator")
        if limit is not Unset and (not isinstance(limit, int) or limit < 1):
            raise ValueError("split() 'limit' must be a positive integer")
        return self.retype(
            self._pipeline.transform_value,
            rename(lambda context, values: list(values), "split"),
            default_all,
            default_validator,
            value_split=pattern,
            nvalues=range(1, coalesce(limit, sys.maxsize - 1) + 1),
        )

    def multiple(self, default=(), /, *, required=False):
        """
        Collect every invocation into a list. When nothing was given the result
        is list(default), or a MissingOptionError when `required` is true.
        """
        self._require("multiple", "transform_all", "missing", "validator")
        default = list(default)

        def missing(context):
            if required:
                context.fail(context.localization.missing_option(context.display_name), error=MissingOptionError)
            return list(default)

        return self.retype(
            self._pipeline.transform_value,
            self._pipeline.transform_each,
            rename(lambda context, values: list(values), "multiple"),
            default_validator,
            missing=rename(missing, "multiple"),
        )

    def unique(self, /):
        """Turn the list produced by multiple() into a set."""
        if getattr(self._pipeline.transform_all, "__name__", None) != "multiple":
            raise TypeError("unique() must be called right after multiple()")
        previous = self._pipeline

        return self.retype(
            previous.transform_value,
            previous.transform_each,
            rename(lambda context, values: set(previous.transform_all(context, values)), "unique"),
            default_validator,
            missing=rename(lambda context: set(previous.missing(context)), "unique"),
        )

    def default(self, value, /):
        """Use `value` when no origin supplied anything."""
        return self.default_lazy(rename(lambda: value, "default"))

    def default_lazy(self, factory, /):
        """Call `factory()` for the value when no origin supplied anything."""
        self._require("default", "transform_all", "missing", "validator")
        if not callable(factory):
            raise TypeError("default_lazy() argument must be callable")
        return self.retype(
            self._pipeline.transform_value,
            self._pipeline.transform_each,
            default_all,
            default_validator,
            missing=rename(lambda context: factory(), "default"),
        )

    def required(self, /):
        """Fail with MissingOptionError when no origin supplied anything."""
        self._require("required", "transform_all", "missing", "validator")

        @rename("required")
        def missing(context):
            context.fail(context.localization.missing_option(context.display_name), error=MissingOptionError)

        return self.retype(
            self._pipeline.transform_value,
            self._pipeline.transform_each,
            default_all,
            default_validator,
            missing=missing,
        )

    def validate(self, validator, /):
        """
        Run validator(option_context, value) after every option resolved. It is
        skipped when the value is None (an absent optional option).
        """
        self._require("validate", "validator")
        if not callable(validator):
            raise TypeError("validate() argument must be callable")

        @rename(getattr(validator, "__name__", "validate"))
        def wrapped(context, value):
            if value is not None:
                validator(context, value)

        return self.copy(validator=wrapped)

    def check(self, predicate, /, message=Unset):
        """
        Fail with FailedValidationError when predicate(value) is false.
        `message` may be a string or a callable receiving the value.
        """
        if not callable(predicate):
            raise TypeError("check() argument must be callable")

        def validator(context, value):
            if not predicate(value):
                if message is Unset:
                    text = context.localization.failed_validation()
                else:
                    text = message(value) if callable(message) else message
                context.fail(text, error=FailedValidationError)

        return self.validate(rename(validator, "check"))

    def deprecated(self, message="", /, tag_name="deprecated", tag_value="", *, error=False):
        """
        Mark the option deprecated.

        A help tag `tag_name` (skipped when blank) is added. When the option was
        used, a DeprecatedOptionWarning is triggered (nothing when message is
        None) or, with error=True, a DeprecatedOptionError is raised before the
        all stage runs. An empty message uses the localized default text.
        The produced value is never altered, and nothing happens when the option
        was not used.
        """
        if not isinstance(message, str | None):
            raise TypeError("deprecated() 'message' must be a string or None")
        tags = dict(self._help_tags)
        if tag_name and tag_name.strip():
            tags[tag_name] = tag_value
        previous = self._pipeline.transform_all

        @rename("deprecated")
        def transform(context, values):
            if values:
                localization = context.localization
                if error:
                    context.fail(
                        message or localization.deprecated_option_error(context.display_name),
                        error=DeprecatedOptionError,
                    )
                elif message is not None:
                    context.warn(
                        message or localization.deprecated_option_warning(context.display_name),
                        warning=DeprecatedOptionWarning,
                    )
            return previous(context, values)

        return self.copy(help_tags=tags)._with_pipeline(copy.replace(self._pipeline, transform_all=transform))


def option(
        *names,
        help="",
        metavar=Unset,
        hidden=False,
        envvar=None,
        help_tags=Unset,
        completion_candidates=None,
        source_key=None,
):
    """
    Create a raw string option.

    The resolved value is the last occurrence's string, or None when the option
    is neither given, nor found in a value source, nor set in the environment.
    Refine it with the builders (integer(), multiple(), default(), ...).

    Parameters
    - names: str
      Names the option is invoked with ("-o", "--output"). When omitted, they
      are inferred from the attribute the option is assigned to.
    - help: str
    - metavar: str | Unset
      Fixed metavar; defaults to the localized "text".
    - hidden: bool
    - envvar: str | None
      Environment variable read when the option is not given.
    - help_tags: Mapping[str, str] | Unset
    - completion_candidates: CompletionCandidates | None
    - source_key: str | None
      Key used by value sources; defaults to the longest name without dashes.
    """
    return OptionDescriptor(
        names=names,
        secondary_names=(),
        nvalues=range(1, 2),
        envvar=envvar,
        value_split=None,
        source_key=source_key,
        help_text=help,
        hidden=hidden,
        help_tags=coalesce(help_tags, {}),
        metavar_getter=None if metavar is Unset else rename(lambda context: metavar, "metavar"),
        explicit_completion_candidates=completion_candidates,
        accepts_number_value_without_name=False,
        accepts_unattached_value=True,
        pipeline=Pipeline(default_value, default_each, default_all, default_validator, default_missing),
    )


__all__ = (
    "Pipeline",
    "OptionDescriptor",
    "option",
    "default_value",
    "default_each",
    "default_all",
    "default_missing",
    "default_validator",
)

# The metaclass is an implementation detail of OptionDescriptor.
del DescriptorType
