"""
Trowel command layer: named units of work with declared parameters.

What this module provides
- Command: holds a name, a description, ordered Parameters, a body callable
  and a back-reference to its Namespace. Executing a command parses the input
  with an OptionParser (built once, on first execution) and calls the body with
  a fresh Context.

Execution flow
    execute("--region", "us-west", "extra")
      → flatten the input into one list
      → build the parser (first call only)
      → keep a copy as raw_params
      → parse (only when the command declares parameters)
      → leftovers become unparsed_params
      → body(Context(runner, params, raw_params, unparsed_params))

Errors are never caught here: MissingParametersError and friends from the
parser, and anything raised by the body, reach the caller unchanged.

Example
    >>> greet = Command(name="greet", parameters=[Parameter("name")],
    ...                 body=lambda context: "hello, " + context.params["name"])
    >>> greet.execute_with_params({"name": "world"})
    'hello, world'
"""
import logging

from .context import Context
from .parser import OptionParser
from .utils import *

logger = logging.getLogger(__name__)


class Command(metaclass=IntrospectableType):
    """
    Named, invocable unit with declared parameters and a body.

    Fields
    - name, description, namespace, body: settable while the command is being
      declared (see Runner.pending_command).
    - parameters: ordered Parameters (read-only copy; use add_parameter()).
    - runner: the Runner handed to every Context.
    - raw_params, params, unparsed_params: results of the latest execution.

    Factories
    - parser_factory: class (or callable) producing the OptionParser.
    - context_factory: class (or callable) producing the Context.
    """

    __introspectable__ = (
        "runner",
        "parameters",
        "raw_params",
        "params",
        "unparsed_params",
    )

    __mutable__ = (
        "name",
        "description",
        "namespace",
        "body",
    )

    __displayable__ = (
        "name",
        "description",
        "parameters",
    )

    def __init__(
            self,
            runner=None,
            /,
            name=None,
            description=None,
            namespace=None,
            parameters=(),
            body=None,
            *,
            parser_factory=OptionParser,
            context_factory=Context
    ):
        self._runner = runner
        self._name = name
        self._description = description
        self._namespace = namespace
        self._parameters = list(parameters)
        self._body = body
        self._parser = parser_factory()
        self._context_factory = context_factory
        self._built = False
        self._raw_params = []
        self._params = {}
        self._unparsed_params = []

    @property
    def full_name(self):
        """
        The name prefixed with the namespace chain, e.g. 'servers:create'.
        """
        if self._namespace is None:
            return str(coalesce(self._name, ""))
        return self._namespace.full_name(self._name)

    @property
    def parser(self):
        return self._parser

    def add_parameter(self, parameter):
        """
        Append a Parameter. Names are not checked for duplicates.
        """
        self._parameters.append(parameter)
        return parameter

    def execute(self, *args):
        """
        Parse `args` (argv-style tokens, possibly nested in lists) and run the body.

        Returns whatever the body returns.
        """
        inputs = list(flatten(args))
        self._build_parser()
        self._raw_params = list(inputs)
        if self._parameters:
            self._params = self._parser.parse(inputs)
        self._unparsed_params = inputs
        return self._run()

    def execute_with_params(self, params=None):
        """
        Run the command with pre-parsed values instead of argv-style tokens.

        Defaults and required parameters are still applied and checked.
        """
        return self.execute([dict(params or {})])

    def usage(self):
        self._build_parser()
        return self._parser.usage()

    def _build_parser(self):
        if self._built:
            return
        self._parser.build(self.full_name, self._description, self._parameters)
        self._built = True

    def _run(self):
        if not callable(self._body):
            raise TypeError(f"{type(self).__typename__} {self.full_name!r} has no body")
        logger.debug("executing %s with %r", self.full_name, self._params)
        context = self._context_factory(
            self._runner,
            self._params,
            self._raw_params,
            self._unparsed_params,
            helpers=getattr(self._runner, "helpers", None),
        )
        return self._body(context)


__all__ = (
    "Command",
)
