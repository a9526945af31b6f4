"""
Trowel runner: the registry that declares, finds and dispatches commands.

What this module provides
- Runner: owns the namespace tree (rooted at "default"), a "current namespace"
  pointer used while declaring, and a single pending command slot that
  accumulates a description and parameters until a body finalizes it.

Declaring
    runner = Runner()

    with runner.in_namespace("servers"):
        runner.describe("Create a server")
        runner.parameter("region", default="us-east-1")

        @runner.command("create")
        def create(context):
            return context.params["region"]

    runner.find_command("servers:create").execute("-r", "eu-west-1")

Dispatching
- run(argv) treats the first token as a colon-delimited command path and hands
  the rest to the command. No path (or a help token) prints the listing.

Loading
- load(*paths) executes command files with `runner` bound in their globals.

Not thread-safe: the current namespace and the pending command are shared
mutable state, meant for single-threaded declaration.
"""
import __main__
import contextlib
import difflib
import logging
import os
import runpy
import shlex
import sys
from pathlib import Path

from rich.console import Console

from .commands import Command
from .context import Context
from .faults import CommandNotFoundError
from .namespaces import Namespace
from .parameters import Parameter
from .parser import OptionParser
from .tables import TableView
from .utils import *

logger = logging.getLogger(__name__)

# First tokens that print the command listing instead of dispatching
HELP_TOKENS = ("-h", "-?", "--help", "help")

# Environment variable listing command directories (os.pathsep-separated)
PATH_VARIABLE = "TROWEL_PATH"

ROOT = "default"
SEPARATOR = ":"


def _command_paths():
    if paths := os.environ.get(PATH_VARIABLE):
        return [Path(path) for path in paths.split(os.pathsep) if path]
    return [Path.cwd() / "commands"]


class Runner(metaclass=IntrospectableType):
    """
    Command registry and dispatcher.

    Configuration (keyword-only)
    - prog: program name shown in the listing; defaults to __main__.__prog__,
      then to the basename of sys.argv[0].
    - command_paths: directories load() reads by default; defaults to the
      TROWEL_PATH environment variable, then to ./commands.
    - helpers: mapping of name → object exposed as attributes of every Context.
    - *_factory: classes (or callables) used to build namespaces, commands,
      parameters, contexts and parsers.
    - console: rich Console the listing is printed to.
    """

    __introspectable__ = (
        "namespace",
        "current_namespace",
        "command_paths",
        "helpers",
        "prog",
    )

    __displayable__ = (
        "prog",
        "namespace",
    )

    def __init__(
            self,
            *,
            prog=Unset,
            command_paths=Unset,
            helpers=None,
            namespace_factory=Namespace,
            command_factory=Command,
            parameter_factory=Parameter,
            context_factory=Context,
            parser_factory=OptionParser,
            console=Unset
    ):
        self._prog = coalesce(prog, getattr(__main__, "__prog__", os.path.basename(sys.argv[0])))
        self._command_paths = _command_paths() if command_paths is Unset else [Path(path) for path in command_paths]
        self._helpers = dict(helpers or {})
        self._namespace_factory = namespace_factory
        self._command_factory = command_factory
        self._parameter_factory = parameter_factory
        self._context_factory = context_factory
        self._parser_factory = parser_factory
        self._console = Console() if console is Unset else console
        self._namespace = namespace_factory(ROOT)
        self._current_namespace = self._namespace
        self._pending_command = None

    def _descend(self, namespace, segments):
        for segment in segments:
            if not segment:
                raise ValueError(f"{type(self).__typename__} namespace names must be non-empty")
            if (child := namespace.lookup_namespace(segment)) is None:
                child = self._namespace_factory(segment)
                namespace.insert(child)
                logger.debug("created namespace %s", child.full_name())
            namespace = child
        return namespace

    @contextlib.contextmanager
    def in_namespace(self, name):
        """
        Make `name` (a child of the current namespace) current for the block.

        The namespace is created on first use and reused afterwards. A
        colon-delimited name enters each segment in turn. The previous
        namespace is restored when the block exits, even on error.
        """
        previous = self._current_namespace
        self._current_namespace = self._descend(previous, str(name).split(SEPARATOR))
        try:
            yield self._current_namespace
        finally:
            self._current_namespace = previous

    @property
    def pending_command(self):
        """
        The command being declared, created on first access.

        It is bound to the namespace current at creation time.
        """
        if self._pending_command is None:
            self._pending_command = self._command_factory(
                self,
                namespace=self._current_namespace,
                parser_factory=self._parser_factory,
                context_factory=self._context_factory,
            )
        return self._pending_command

    def clear_pending_command(self):
        self._pending_command = None

    def describe(self, description, /):
        self.pending_command.description = description

    def parameter(self, name, /, **options):
        """
        Declare a parameter on the pending command; options are those of Parameter.
        """
        return self.pending_command.add_parameter(self._parameter_factory(name, **options))

    def command(self, source=Unset, body=Unset, /, *, description=Unset):
        """
        Finalize the pending command with a body.

        Forms
        - @runner.command                 → named after the function
        - @runner.command("name")         → explicit name
        - runner.command("name", body)    → direct registration

        A name may carry namespaces ("servers:create"); they are resolved below
        the namespace of the pending command. Declarations stacked on the body
        with trowel.dsl.describe/parameter are merged in.

        Returns the registered Command.
        """
        name = Unset
        if callable(source):
            body, source = source, Unset
        if source is not Unset:
            if not isinstance(source, str):
                raise TypeError("command() name must be a string")
            name = source

        @rename("command")
        def wrapper(body, /):
            if not callable(body):
                raise TypeError("@command() must be applied to a callable")
            *namespaces, local = str(coalesce(name, body.__name__)).split(SEPARATOR)
            command = self.pending_command
            command.namespace = self._descend(command.namespace or self._namespace, namespaces)
            command.name = local
            command.body = body
            if description is not Unset:
                command.description = description
            elif command.description is None:
                command.description = getattr(body, "__description__", None)
            for parameter, options in getattr(body, "__parameters__", ()):
                command.add_parameter(self._parameter_factory(parameter, **options))
            command.namespace.insert(command)
            self.clear_pending_command()
            logger.debug("registered command %s", command.full_name)
            return command

        if body is not Unset:
            return wrapper(body)
        return wrapper

    def find_command(self, path, /):
        """
        Resolve a colon-delimited path from the root; None when any segment is missing.
        """
        *namespaces, name = str(path).split(SEPARATOR)
        namespace = self._namespace
        for segment in namespaces:
            if (namespace := namespace.lookup_namespace(segment)) is None:
                return None
        return namespace.lookup_command(name)

    def run(self, argv=Unset, /):
        """
        Dispatch a command line and return the command's result.

        argv
        - Unset: read tokens from sys.argv[1:].
        - str: shell-like string; split with shlex.split.
        - list/tuple: tokens (nested lists are flattened).

        Returns None after printing the listing (no path, or a help token).

        Raises
        - CommandNotFoundError: when the path names no command.
        - Anything raised by the parser or the command body.
        """
        if argv is Unset:
            tokens = sys.argv[1:]
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        else:
            tokens = list(flatten(argv))

        if not tokens or not tokens[0] or tokens[0] in HELP_TOKENS:
            self.display_help()
            return None

        path, *tokens = tokens
        if (command := self.find_command(path)) is None:
            names = [name for name, _ in self._namespace.list_commands_with_descriptions()]
            raise CommandNotFoundError(path, difflib.get_close_matches(str(path), names, n=3))

        logger.debug("dispatching %s", command.full_name)
        return command.execute(tokens)

    def listing(self):
        """
        Build the command listing as a TableView.
        """
        table = TableView(title="%s commands:\n" % self._prog, headers=("Command", "Description"), divider="\t")
        for name, description in self._namespace.list_commands_with_descriptions():
            table.add_record(name, description)
        return table

    def display_help(self):
        # written as-is: rendering through rich would expand the tab divider
        self._console.file.write(str(self.listing()))
        self._console.file.flush()

    def load(self, *paths):
        """
        Execute every *.py file under the given directories (recursively, sorted)
        with `runner` bound to self in their globals.

        Defaults to command_paths; missing directories are skipped. A path may
        also name a single file. Returns the loaded files.
        """
        loaded = []
        for path in map(Path, paths or self._command_paths):
            if path.is_dir():
                files = sorted(path.glob("**/*.py"))
            elif path.is_file():
                files = [path]
            else:
                logger.debug("skipping missing command path %s", path)
                continue
            for file in files:
                logger.debug("loading %s", file)
                runpy.run_path(str(file), init_globals={"runner": self})
                loaded.append(file)
        return loaded


__all__ = (
    "Runner",
    "HELP_TOKENS",
    "PATH_VARIABLE",
)
