"""
Trowel faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- TrowelError: base type that carries a message plus options (code, title, hint)
  and knows how to render itself with rich.
- trigger(): the single top-level reporting point; prints the fault to stderr,
  optionally a traceback (see debugging()), and exits with status 1.
- debugging(): whether the TROWEL_DEBUG environment variable enables tracebacks.

Propagation
- The core raises these errors and never catches them. Only the program entry
  point (trowel.__main__) turns them into output and an exit status.

Integration
- The host application can customize rendering through attributes of __main__:
  __prog__ (program name), __styles__ (palette overrides) and __codes__
  (relabelled fault codes).
"""
import os
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)

DEBUG_VARIABLE = "TROWEL_DEBUG"

# Default styles of rendered faults; __main__.__styles__ overrides entries by role
PALETTE = MappingProxyType({
    "prog": "bold white",
    "code": "bold cyan",
    "title": "bold red",
    "message": "default",
    "arrow": "dim green",
    "hint": "italic green",
})


class FaultCode(IntEnum):
    """
    canonical fault codes used across trowel (stable identifiers).

    ranges
    - routing (2110x)
      • COMMAND_NOT_FOUND
    - parameters (2111x)
      • MISSING_PARAMETERS, MISSING_ARGUMENT, UNKNOWN_SWITCH
    - declarations (2112x)
      • INVALID_SHORT_SWITCH
    - presentation (2113x)
      • INVALID_DATA_FOR_COLUMNS
    - delegated (2114x)
      • DELEGATED_ERROR (any error raised by a command body)
    """
    # --- routing errors ---
    COMMAND_NOT_FOUND           = 21101

    # --- parameter errors ---
    MISSING_PARAMETERS          = 21111
    MISSING_ARGUMENT            = 21112
    UNKNOWN_SWITCH              = 21113

    # --- declaration errors ---
    INVALID_SHORT_SWITCH        = 21121

    # --- presentation errors ---
    INVALID_DATA_FOR_COLUMNS    = 21131

    # --- delegated errors ---
    DELEGATED_ERROR             = 21141

    def normalize(self):
        """
        the label printed for this code; __main__.__codes__ may map codes to
        friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def debugging():
    """
    Return True when the debug environment variable holds an enabling value.
    """
    return os.environ.get(DEBUG_VARIABLE, "").strip().lower() in ("1", "true", "yes", "on")


class TrowelError(Exception):
    """
    Base class of every error raised by trowel.

    Options
    - code: FaultCode identifying the error.
    - title: short headline used when rendering.
    - hint: one actionable sentence shown under the message.
    - colorful: render with the palette (default True).
    """
    code = FaultCode.DELEGATED_ERROR
    title = "error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).code,
            "title": type(self).title,
            "hint": Unset,
            "colorful": True,
        } | options)

    def __rich__(self):
        main = __import__("__main__")
        palette = PALETTE | getattr(main, "__styles__", {})

        def styled(fragment, role):
            style = palette.get(role, "") if self.options["colorful"] else ""
            return Text(str(fragment), style) if fragment else Text("")

        prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "trowel")
        lines = [
            Text.assemble(
                "[ ", styled(prog, "prog"),
                " — ", styled(self.options["code"].normalize(), "code"),
                " | ", styled(self.options["title"].title(), "title"), " ]",
            ),
            styled(self.message, "message"),
        ]
        if hint := coalesce(self.options["hint"]):
            lines.append(Text.assemble(styled(" → ", "arrow"), styled(hint, "hint")))
        return Group(*lines)

    def __trigger__(self):
        console.print(self)
        sys.exit(1)

    def __replace__(self, /, **overrides):
        replica = type(self).__new__(type(self))
        replica.__dict__.update(self.__dict__)
        replica.args = self.args
        replica.__cause__ = self.__cause__
        replica.options = MappingProxyType({**self.options, **overrides})
        return replica


class MissingParametersError(TrowelError):
    """
    One or more required parameters have no value after parsing and defaults.

    The ordered list of missing parameter names is available as `names`.
    """
    code = FaultCode.MISSING_PARAMETERS
    title = "missing parameters"

    def __init__(self, names, /, **options):
        self.names = list(names)
        super().__init__("missing parameters: %s." % ", ".join(map(str, self.names)), **{
            "hint": "pass every required parameter, e.g. --%s=VALUE" % str(self.names[0]).replace("_", "-")
            if self.names else Unset,
        } | options)


class InvalidShortSwitchError(TrowelError):
    code = FaultCode.INVALID_SHORT_SWITCH
    title = "invalid short switch"

    def __init__(self, parameter, switch, /, **options):
        self.parameter = parameter
        self.switch = switch
        super().__init__("the '-%s' short switch of parameter %r is reserved for help" % (switch, parameter), **{
            "hint": "choose another short switch or let one be assigned automatically",
        } | options)


class UnknownSwitchError(TrowelError):
    code = FaultCode.UNKNOWN_SWITCH
    title = "unknown switch"

    def __init__(self, token, /, suggestions=(), **options):
        self.token = token
        self.suggestions = tuple(suggestions)
        if self.suggestions:
            hint = "did you mean %s?" % " or ".join(map(repr, self.suggestions))
        else:
            hint = "run the command with --help to see its parameters"
        super().__init__("unknown switch %r" % token, **{"hint": hint} | options)


class MissingArgumentError(TrowelError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"

    def __init__(self, token, /, **options):
        self.token = token
        super().__init__("switch %r requires a value" % token, **{
            "hint": "use %s=VALUE or %s VALUE" % (token, token),
        } | options)


class CommandNotFoundError(TrowelError):
    code = FaultCode.COMMAND_NOT_FOUND
    title = "command not found"

    def __init__(self, path, /, suggestions=(), **options):
        self.path = path
        self.suggestions = tuple(suggestions)
        if self.suggestions:
            hint = "did you mean %s? run 'help' to list every command" % " or ".join(map(repr, self.suggestions))
        else:
            hint = "run 'help' to list every command"
        super().__init__("no command named %r" % str(path), **{"hint": hint} | options)


class InvalidDataForColumnsError(TrowelError):
    code = FaultCode.INVALID_DATA_FOR_COLUMNS
    title = "invalid data for columns"

    def __init__(self, values, columns, /, **options):
        self.values = values
        self.columns = columns
        super().__init__(
            "number of values for record (%d) does not match number of columns (%d)" % (values, columns),
            **options
        )


class DelegatedCommandError(TrowelError):
    """
    Wrapper used at the top level to report an error raised by a command body.

    The original exception is kept as __cause__.
    """
    code = FaultCode.DELEGATED_ERROR
    title = "command failed"


def trigger(fault, /, **options):
    """
    surface a fault: render it to stderr and exit with status 1.

    contract
    - fault must provide __trigger__ and __replace__ methods (see TrowelError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - when debugging() is true, the traceback of the exception being handled is
      printed as well (call trigger() from inside an except block).
    """
    if not all(callable(getattr(fault, name, None)) for name in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must implement __trigger__ and __replace__")
    if debugging() and sys.exc_info()[0] is not None:
        console.print_exception()
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "TrowelError",
    "MissingParametersError",
    "InvalidShortSwitchError",
    "UnknownSwitchError",
    "MissingArgumentError",
    "CommandNotFoundError",
    "InvalidDataForColumnsError",
    "DelegatedCommandError",
    "trigger",
    "debugging",
    "DEBUG_VARIABLE",
)
