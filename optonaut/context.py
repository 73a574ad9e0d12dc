"""
Contexts handed to pipeline stages.

Context
- The command-level context of one parse pass: where environment variables and
  value sources are looked up, which localization to use for user-facing text,
  and how faults and messages are surfaced (shell/fancy/colorful/deferred, as
  for faults in optonaut.faults).

OptionCallContext / OptionContext
- Plain records passed explicitly to stage functions. The call context names the
  invocation being converted (value and each stages); the option context does not
  (all stage and validators). Both expose fail()/require()/message() so stage
  functions never have to build faults by hand.

Localization
- Every user-facing string produced by the library. Subclass and pass an
  instance to Context(localization=...) to translate or reword them.
"""
import copy
import os
import sys
from collections.abc import Mapping

from rich.text import Text

from .faults import BadValueError, OptionWarning, console, trigger
from .sources import ChainedValueSource
from .utils import Unset, coalesce, freeze, longest


class Localization:
    """
    Default (English) strings. Method names describe the situation, not the text.
    """

    def string_metavar(self):
        return "text"

    def int_metavar(self):
        return "int"

    def float_metavar(self):
        return "float"

    def bool_metavar(self):
        return "bool"

    def invalid_integer(self, value):
        return "%r is not a valid integer" % value

    def invalid_float(self, value):
        return "%r is not a valid float" % value

    def invalid_boolean(self, value):
        return "%r is not a valid boolean" % value

    def invalid_choice(self, value, choices):
        return "invalid choice: %s. (choose from %s)" % (value, ", ".join(choices))

    def invalid_arity(self, count, nvalues):
        low, high = nvalues.start, nvalues.stop - 1
        if nvalues.stop >= sys.maxsize:
            return "expected at least %d value%s, got %d" % (low, "" if low == 1 else "s", count)
        if low == high:
            return "expected %d value%s, got %d" % (low, "" if low == 1 else "s", count)
        return "expected between %d and %d values, got %d" % (low, high, count)

    def missing_option(self, name):
        return "missing option %s" % name

    def failed_validation(self):
        return "value failed validation"

    def deprecated_option_warning(self, name):
        return "WARNING: option %s is deprecated" % name

    def deprecated_option_error(self, name):
        return "ERROR: option %s is deprecated" % name


class Context:
    """
    Command-level context for one parse pass.

    Parameters
    - name: str | Unset
      Program or command name used in rendered faults.
    - environ: Mapping[str, str] | Unset
      Environment lookup table; defaults to os.environ (read live).
    - sources: Iterable[ValueSource]
      Value sources consulted, in order, when an option was not invoked.
    - localization: Localization | Unset
    - shell/fancy/colorful/deferred: bool
      Fault rendering flags, forwarded to every triggered fault.
    """

    def __init__(
            self,
            name=Unset,
            /,
            *,
            environ=Unset,
            sources=(),
            localization=Unset,
            shell=False,
            fancy=False,
            colorful=False,
            deferred=False,
    ):
        if not isinstance(name, str | Unset):
            raise TypeError("context 'name' must be a string")
        if not isinstance(environ, Mapping | Unset):
            raise TypeError("context 'environ' must be a mapping")
        localization = coalesce(localization, Localization())
        if not isinstance(localization, Localization):
            raise TypeError("context 'localization' must be a Localization")

        self.name = coalesce(name)
        self.environ = coalesce(environ, os.environ)
        self.sources = tuple(sources)
        self.localization = localization
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.deferred = bool(deferred)
        self._messages = []

    @property
    def messages(self):
        """Messages issued through issue_message(), in order."""
        return freeze(self._messages)

    def getenv(self, name, /):
        """
        Return the value of environment variable `name`, or None when it is not
        set. An empty string is a set variable.
        """
        return self.environ.get(name)

    def values(self, descriptor, /):
        """
        Ask every value source, in order, for `descriptor`; the first non-empty
        answer wins. Returns a (possibly empty) list of invocations.
        """
        return ChainedValueSource(*self.sources).get_values(self, descriptor)

    def issue_message(self, message, /):
        """
        Record a user-visible message; in shell mode it is also printed to stderr.
        """
        self._messages.append(message)
        if self.shell:
            console.print(Text(str(message), style="yellow" if self.colorful else ""))

    def trigger(self, fault, /, **options):
        """
        Surface `fault` with this context's rendering flags merged in.
        """
        trigger(
            fault,
            **options,
            prog=self.name,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            deferred=self.deferred,
        )

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        other = copy.copy(self)
        other._messages = []
        for key, value in overrides.items():
            if key not in ("name", "environ", "sources", "localization", "shell", "fancy", "colorful", "deferred"):
                raise TypeError("unexpected context field %r" % key)
            setattr(other, key, tuple(value) if key == "sources" else value)
        return other

    def __repr__(self):
        return "context(name=%r, shell=%r, sources=%d)" % (self.name, self.shell, len(self.sources))


class _StageContext:
    """
    Shared behavior of the stage contexts.
    """
    __slots__ = ("option", "context")

    def __init__(self, option, context, /):
        self.option = option
        self.context = context

    @property
    def localization(self):
        return self.context.localization

    @property
    def display_name(self):
        raise NotImplementedError

    def fail(self, message="", /, error=BadValueError):
        """Raise `error` (a BadValueError by default) naming this option."""
        raise error(message, option=self.display_name)

    def require(self, value, message="", /):
        """Call fail() when `value` is false; `message` may be a zero-argument callable."""
        if not value:
            self.fail(message() if callable(message) else message)

    def message(self, message, /):
        """Issue a user-visible message through the command context."""
        self.context.issue_message(message)

    def warn(self, message, /, warning=OptionWarning, **options):
        """Trigger an OptionWarning (or subclass) about this option."""
        self.context.trigger(warning(message, option=self.display_name, **options))


class OptionCallContext(_StageContext):
    """
    Context of the value and each stages: one specific invocation.

    Attributes
    - name: the name the option was invoked with ("" for value sources, the
      variable name for environment fallbacks).
    - option: the OptionDescriptor being resolved.
    - context: the command Context.
    """
    __slots__ = ("name",)

    def __init__(self, name, option, context, /):
        super().__init__(option, context)
        self.name = name

    @property
    def display_name(self):
        return self.name or longest(self.option.names)

    def __repr__(self):
        return "option-call-context(name=%r)" % self.name


class OptionContext(_StageContext):
    """
    Context of the all stage and validators: the option as a whole.

    Attributes
    - resolved: the Resolved view of the running parse pass, handed to
      validators so they can read sibling options; None in the all stage.
    """
    __slots__ = ("resolved",)

    def __init__(self, option, context, resolved=None, /):
        super().__init__(option, context)
        self.resolved = resolved

    @property
    def display_name(self):
        return longest(self.option.names)

    def __repr__(self):
        return "option-context(option=%r)" % self.display_name


__all__ = (
    "Localization",
    "Context",
    "OptionCallContext",
    "OptionContext",
)
