"""
Trowel parameter declarations.

A Parameter describes one named input of a command: its default, whether it
may be omitted, a description for help output, and its short switch. The short
switch is the only mutable field; the option parser assigns it lazily when the
parameter does not request one explicitly.

Quick example:
    >>> region = Parameter("region", default="us-east-1", description="Region to use")
    >>> region.required
    False
"""
from .utils import *


class Parameter(metaclass=IntrospectableType):
    """
    Named input of a command.

    Fields
    - name: str (unique within a command; also the long switch, with '_' as '-').
    - default: any value, or Unset when absent. None, 0, "" and False are defaults.
    - optional: bool, explicitly allow the parameter to be omitted.
    - description: str | None, shown in usage output.
    - short: str | None, single-character switch; assigned by the parser when None.

    A parameter is required unless it has a default or is marked optional.
    """

    __introspectable__ = (
        "name",
        "default",
        "optional",
        "description",
    )

    __mutable__ = (
        "short",
    )

    def __init__(self, name, /, default=Unset, optional=False, description=Unset, short=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")

        if not isinstance(description, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'description' must be a string")

        if not isinstance(short, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'short' must be a string")
        elif isinstance(short, str) and len(short := short.lstrip("-")) != 1:
            raise ValueError(f"{type(self).__typename__} 'short' must be a single character")

        self._name = name
        self._default = default
        self._optional = bool(optional)
        self._description = coalesce(description)
        self._short = coalesce(short)

    @property
    def required(self):
        """
        Whether the parameter must receive a value (no default and not optional).
        """
        return self._default is Unset and not self._optional

    @property
    def switch(self):
        """
        The long switch token, e.g. '--server-id' for 'server_id'.
        """
        return "--" + self._name.replace("_", "-")

    @property
    def metavar(self):
        """
        The value label used in usage output, e.g. 'SERVER_ID'.
        """
        return self._name.upper()


__all__ = (
    "Parameter",
)
