"""
Declaration decorators that describe a command on its body function.

They record the declaration on the function itself instead of on the Runner's
pending command, so a whole declaration travels as one value:

    @runner.command("servers:create")
    @describe("Create a new server")
    @parameter("name", description="Name of the server")
    @parameter("region", default="us-east-1")
    def create(context):
        ...

Stacked decorators keep top-down order: 'name' is declared before 'region'.
Runner.command() reads the recorded declarations when it finalizes the command.
"""
from .utils import *


def parameter(name, /, **options):
    """
    Record a parameter declaration on the decorated body.

    Options are those of Parameter: default, optional, description, short.
    """
    @rename("parameter")
    def wrapper(body, /):
        if not callable(body):
            raise TypeError("@parameter() must be applied to a callable")
        # Decorators run bottom-up; prepend to keep declaration order.
        body.__parameters__ = [(name, options), *getattr(body, "__parameters__", ())]
        return body
    return wrapper


def describe(description, /):
    """
    Record the command description on the decorated body.
    """
    if not isinstance(description, str):
        raise TypeError("@describe() argument must be a string")

    @rename("describe")
    def wrapper(body, /):
        if not callable(body):
            raise TypeError("@describe() must be applied to a callable")
        body.__description__ = description
        return body
    return wrapper


__all__ = (
    "parameter",
    "describe",
)
