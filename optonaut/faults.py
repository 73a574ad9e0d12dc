"""
Optonaut faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  raised while resolving option values. Codes are grouped by domain.
- OptionException / OptionWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- OptionExit: the grouped faults of one parse pass.
- ResolutionGuardViolation: a programmer error (value read before resolution);
  it is deliberately not an OptionException and never rendered as usage.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Rendering
- In non-shell mode exceptions are raised and warnings go through warnings.warn.
- In shell mode both are rendered through rich on stderr; exceptions then exit(1)
  unless the fault is deferred.
- Styles and code labels can be overridden by the host application through
  __styles__ and __codes__ in __main__; __prog__ overrides the program name.
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used while resolving options (stable identifiers).

    grouping
    - values (2110x)
      • BAD_VALUE, INVALID_ARITY, INVALID_CHOICE, MISSING_OPTION
    - validation (2111x)
      • FAILED_VALIDATION
    - deprecations (2112x / 2212x)
      • DEPRECATED_OPTION (error), DEPRECATED_OPTION_WARNING
    - messages (2213x)
      • OPTION_MESSAGE
    """
    # --- value errors (21xxx) ---
    BAD_VALUE                 = 21101
    INVALID_ARITY             = 21102
    INVALID_CHOICE            = 21103
    MISSING_OPTION            = 21104

    # --- validation errors (21xxx) ---
    FAILED_VALIDATION         = 21111

    # --- deprecations (21xxx errors, 22xxx warnings) ---
    DEPRECATED_OPTION         = 21121
    DEPRECATED_OPTION_WARNING = 22121

    # --- messages (22xxx) ---
    OPTION_MESSAGE            = 22131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(self, palette, kind, /):
    """
    Build the rich renderable shared by OptionException and OptionWarning.

    `palette` holds the default styles for `kind` ("error" or "warning"); the
    host application may override any of them through __main__.__styles__.
    """
    main = __import__("__main__")
    options = self.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = getattr(main, "__prog__", options.get("prog") or "optonaut")
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "", "code"),
        " | ",
        text(str(options.get("title", kind)).title(), kind + "-title"),
        " ]"
    )
    message = text(self.message, kind + "-message")
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*parts), title=header, title_align="left", width=width)

    return Group(header, *parts)


class OptionException(Exception):
    """
    Base class of every user-facing option error.

    Carries the message and a read-only bag of options (option name, code,
    title, hint, rendering flags). The option name may be filled in late by
    the pipeline when a converter raised without knowing which option it served.
    """
    __code__ = FaultCode.BAD_VALUE
    __title__ = "bad value"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType({
            "code": type(self).__code__,
            "title": type(self).__title__,
        } | options)

    @property
    def option(self):
        """The display name of the option this fault is about, or None."""
        return self.options.get("option")

    @property
    def code(self):
        return self.options["code"]

    def __str__(self):
        if self.option:
            return "invalid value for %s: %s" % (self.option, self.message)
        return self.message

    def __rich__(self):
        return _renderer(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        if self.options.get("deferred"):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class BadValueError(OptionException): ...


class InvalidArityError(BadValueError):
    __code__ = FaultCode.INVALID_ARITY
    __title__ = "invalid number of values"


class InvalidChoiceError(BadValueError):
    __code__ = FaultCode.INVALID_CHOICE
    __title__ = "invalid choice"


class FailedValidationError(BadValueError):
    __code__ = FaultCode.FAILED_VALIDATION
    __title__ = "failed validation"


class DeprecatedOptionError(BadValueError):
    __code__ = FaultCode.DEPRECATED_OPTION
    __title__ = "deprecated option"

    def __str__(self):
        return self.message


class MissingOptionError(OptionException):
    __code__ = FaultCode.MISSING_OPTION
    __title__ = "missing option"

    def __str__(self):
        return self.message


class OptionWarning(Warning):
    """
    Base class of user-facing option warnings.

    Outside shell mode they travel through warnings.warn, so hosts keep the
    usual filters (e.g. warnings.simplefilter("error")) and tests can use
    assertWarns.
    """
    __code__ = FaultCode.OPTION_MESSAGE
    __title__ = "message"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType({
            "code": type(self).__code__,
            "title": type(self).__title__,
        } | options)

    @property
    def option(self):
        return self.options.get("option")

    def __rich__(self):
        return _renderer(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeprecatedOptionWarning(OptionWarning):
    __code__ = FaultCode.DEPRECATED_OPTION_WARNING
    __title__ = "deprecated option"


class OptionExit(ExceptionGroup[OptionException]):
    """
    Every fault collected during one parse pass, raised once at the end.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        } | getattr(main, "__styles__", {}))

        prog = getattr(main, "__prog__", self.options.get("prog") or "optonaut")
        header = Text.assemble(
            "[ ",
            Text(str(prog), styles["prog-name"] if colorful else ""),
            " — ",
            Text(self.message.title(), styles["title"] if colorful else ""),
            " ]"
        )
        renders = [copy.replace(exception, ratio=2/3) for exception in self.exceptions]

        if self.options.get("fancy"):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


class ResolutionGuardViolation(RuntimeError):
    """
    An option value was read before the parse pass resolving it completed.

    This is an integration error in the host application (reading options in a
    constructor, before parse(), or an option whose resolution failed).
    It is never converted into a usage error.
    """


def fail(message, name=None, /):
    """
    Raise a BadValueError for the option `name` (display name, may be None).
    """
    raise BadValueError(message, option=name)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into the fault via copy.replace before triggering.
    - in shell mode, rendering happens via the rich console; otherwise exceptions
      are raised and warnings are emitted.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code from __main__.__docs__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionException",
    "BadValueError",
    "InvalidArityError",
    "InvalidChoiceError",
    "FailedValidationError",
    "DeprecatedOptionError",
    "MissingOptionError",
    "OptionWarning",
    "DeprecatedOptionWarning",
    "OptionExit",
    "ResolutionGuardViolation",
    "fail",
    "trigger",
    "getdoc",
)
