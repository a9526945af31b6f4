r"""
Trowel option parser: turn argv-style tokens into named parameter values.

What this module provides
- OptionParser: a strategy object built once per command from its Parameters.
  • build(name, description, parameters): derives long/short switches, assigns
    missing short switches, and splits parameters into required/optional groups.
  • parse(args): destructively scans a token list, returns a name → value dict,
    applies defaults and verifies required parameters.
  • usage(): renders the help text of the command.

Switches
- Long form: '--server-id=VALUE' or '--server-id VALUE' (underscores become dashes).
  A unique prefix of a long switch is accepted ('--serv' for '--server-id').
- Short form: '-s VALUE' or '-sVALUE'.
- Every switch takes a value; the following token is consumed even when it
  starts with a dash.
- '--' ends scanning; every later token is left unparsed.
- '-h' / '--help' prints usage() and exits with status 1.

Short-switch assignment
- An explicit short switch is used as-is, except 'h' which is reserved for help
  (InvalidShortSwitchError).
- Otherwise the name is scanned from its first character; 'h' and characters
  that are not letters or digits are skipped, and the first character that no
  other parameter already uses is claimed and stored on the Parameter. When
  every character collides, the parameter keeps only its long switch.

Quick example:
    >>> parser = OptionParser()
    >>> parser.build("servers:create", "Create a server", [Parameter("region"), Parameter("rate")])
    >>> parser.parse(["-r", "us-west", "-a", "fast"])
    {'region': 'us-west', 'rate': 'fast'}
"""
import difflib
import re
import sys
from collections import deque
from collections.abc import Mapping

from rich.console import Console

from .faults import *
from .utils import *

# Reserved short switch of the help flag
HELP = "h"

# Layout of usage() lines, column-aligned like most getopt-style tools
INDENT = 4
WIDTH = 32

console = Console()


class OptionParser(metaclass=IntrospectableType):
    """
    Flag grammar of a single command.

    Lifecycle
    - build() is called once (commands memoize it); it may set Parameter.short.
    - parse() is called per invocation; it only mutates the token list it is given.

    Properties
    - name/description: the built command name and banner text.
    - parameters: ordered Parameters as passed to build().
    - required/optional: the same Parameters partitioned for help rendering.
    - switches: mapping of every accepted switch token to its Parameter.
    """

    __introspectable__ = (
        "name",
        "description",
        "parameters",
        "required",
        "optional",
        "switches",
    )

    __displayable__ = (
        "name",
        "description",
        "parameters",
    )

    def __init__(self):
        self._name = None
        self._description = None
        self._parameters = []
        self._required = []
        self._optional = []
        self._switches = {}

    def build(self, name=None, description=None, parameters=()):
        """
        Construct the flag grammar from the given parameters.

        Parameters
        - name: str | None, the command's full name (shown in the USAGE line).
        - description: str | None, the banner of the usage text.
        - parameters: ordered iterable of Parameter.

        Behavior
        - For each parameter in order: register its long switch, resolve its
          short switch (see module docs) and file it under required/optional.
        - The help switches are always registered and never assigned to a
          parameter.

        Raises
        - InvalidShortSwitchError when a parameter explicitly requests '-h'.
        """
        self._name = name
        self._description = description
        self._parameters = list(parameters)
        self._required = []
        self._optional = []
        self._switches = {}

        for parameter in self._parameters:
            self._switches[parameter.switch] = parameter
            if short := self._short_switch(parameter):
                self._switches["-" + short] = parameter
            (self._required if parameter.required else self._optional).append(parameter)

        return self

    def _short_switch(self, parameter):
        if (short := parameter.short) is not None:
            if short == HELP:
                raise InvalidShortSwitchError(parameter.name, short)
            # TODO: detect two explicit short switches colliding with each other.
            return short

        for char in parameter.name:
            if char == HELP or not char.isalnum():
                continue
            if any(other is not parameter and other.short == char for other in self._parameters):
                continue
            # Stored on the parameter so later collision checks see it.
            parameter.short = char
            return char

        return None

    def parse(self, args):
        """
        Parse a token list into a mapping of parameter name → value.

        Parameters
        - args: list
          Tokens as received on the command line. When the last item is a
          mapping, it is removed and used as pre-parsed values.

        Behavior
        - Recognized switches and their values are removed from args; whatever
          remains in args afterwards is positional (unparsed) input.
        - Values given in the pre-parsed mapping win over scanned ones.
        - Defaults are applied to every parameter still without a value.

        Returns
        - dict mapping parameter names to values.

        Raises
        - UnknownSwitchError: a dash-prefixed token names no parameter.
        - MissingArgumentError: a switch has no value left to consume.
        - MissingParametersError: required parameters have no value.
        - SystemExit(1): after printing usage for '-h' / '--help'.
        """
        values = dict(args.pop()) if args and isinstance(args[-1], Mapping) else {}
        supplied = set(values)

        tokens = deque(args)
        args.clear()

        while tokens:
            token = tokens.popleft()

            if not isinstance(token, str) or not token.startswith("-") or token == "-":
                args.append(token)
                continue

            if token == "--":
                args.extend(tokens)
                break

            if token in ("-" + HELP, "--help"):
                self._helper()

            parameter, value = self._resolve_token(token)

            if value is None:
                try:
                    value = tokens.popleft()
                except IndexError:
                    raise MissingArgumentError(token.partition("=")[0]) from None

            if parameter.name not in supplied:
                values[parameter.name] = value

        for parameter in self._parameters:
            if parameter.default is not Unset and parameter.name not in values:
                values[parameter.name] = parameter.default

        if missing := [parameter.name for parameter in self._parameters if parameter.required and parameter.name not in values]:
            raise MissingParametersError(missing)

        return values

    def _resolve_token(self, token):
        """
        Normalize one switch token into (Parameter, inline value or None).
        """
        if token.startswith("--"):
            input, separator, value = token.partition("=")
            value = value if separator else None
            try:
                return self._switches[input], value
            except KeyError:
                pass

            candidates = [
                switch for switch, parameter in self._switches.items()
                if switch.startswith(input) and switch.startswith("--")
            ]
            if len(candidates) == 1:
                return self._switches[candidates[0]], value
            raise UnknownSwitchError(input, candidates or difflib.get_close_matches(input, self._longs(), 3))

        match = re.fullmatch(r"-(?P<short>[^-])(?P<value>.*)", token, re.DOTALL)
        if not match:
            raise UnknownSwitchError(token, difflib.get_close_matches(token, self._switches.keys(), 3))

        try:
            parameter = self._switches["-" + match["short"]]
        except KeyError:
            raise UnknownSwitchError("-" + match["short"], difflib.get_close_matches(token, self._switches.keys(), 3)) from None

        return parameter, match["value"] or None

    def _longs(self):
        return [switch for switch in self._switches if switch.startswith("--")]

    def _helper(self):
        console.print(self.usage(), end="", markup=False, highlight=False, soft_wrap=True)
        sys.exit(1)

    def usage(self):
        """
        Render the usage text.

        Layout
        - description banner and a blank line (omitted without a description),
        - 'USAGE: <name> [options]',
        - 'REQUIRED:' then 'OPTIONAL:' blocks (each omitted when empty), one
          line per parameter with its switches, description and default,
        - the help switch line.
        """
        lines = []
        if self._description:
            lines.extend((str(self._description), ""))
        lines.append("USAGE: %s [options]" % coalesce(self._name, ""))

        for label, group in (("REQUIRED:", self._required), ("OPTIONAL:", self._optional)):
            if not group:
                continue
            lines.extend(("", label))
            for parameter in group:
                summary = []
                if parameter.description:
                    summary.append(str(parameter.description))
                if parameter.default is not Unset:
                    summary.append("Defaults to: %s" % (parameter.default,))
                lines.extend(_summarize(_switches(parameter), summary))

        lines.append("")
        lines.extend(_summarize("-%s, --help" % HELP, ["This message."]))

        return "\n".join(lines) + "\n"


def _switches(parameter):
    long = "%s=%s" % (parameter.switch, parameter.metavar)
    if parameter.short is None:
        return " " * 4 + long
    return "-%s, %s" % (parameter.short, long)


def _summarize(left, right):
    """
    Yield the aligned lines of one switch: flags in the left column, each
    summary line in the right column.
    """
    padding = " " * INDENT
    right = deque(right)
    if len(left) > WIDTH or not right:
        yield padding + left
    else:
        yield (padding + left.ljust(WIDTH) + " " + right.popleft()).rstrip()
    for line in right:
        yield padding + " " * WIDTH + " " + line


__all__ = (
    "OptionParser",
)
