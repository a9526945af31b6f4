"""
Trowel execution context: what a command body receives.

Every execution builds a fresh Context holding the runner, the parsed params
(read-only), the raw input and the unparsed leftovers. Helpers registered on
the Runner are reachable as attributes, which is how deployments give their
command bodies shared tools (loggers, clients, formatters, ...).

Example
    runner = Runner(helpers={"shout": str.upper})

    @runner.command("hello")
    def hello(context):
        return context.shout("hello, %s" % context.params.get("name", "world"))
"""
from types import MappingProxyType

from .faults import CommandNotFoundError
from .utils import *


class Context(metaclass=IntrospectableType):

    __introspectable__ = (
        "runner",
        "raw_params",
        "unparsed_params",
        "helpers",
    )

    __displayable__ = (
        "params",
        "raw_params",
        "unparsed_params",
    )

    def __init__(self, runner, params, raw_params, unparsed_params, *, helpers=None):
        self._runner = runner
        self._params = MappingProxyType(dict(params))
        self._raw_params = raw_params
        self._unparsed_params = unparsed_params
        self._helpers = MappingProxyType(dict(helpers or {}))

    @property
    def params(self):
        return self._params

    def __getattr__(self, name):
        # Only reached when normal lookup fails: fall back to the helpers.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._helpers[name]
        except KeyError:
            raise AttributeError(f"{type(self).__typename__} has no attribute or helper {name!r}") from None

    def execute(self, path, params=None):
        """
        Run another command by its full name and return its result.

        `params` is passed as pre-parsed values; errors from the nested command
        propagate unchanged.
        """
        if (command := self._runner.find_command(path)) is None:
            raise CommandNotFoundError(path)
        return command.execute_with_params(params)


__all__ = (
    "Context",
)
