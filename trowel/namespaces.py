"""
Trowel namespaces: the tree that groups commands under colon-delimited names.

A Namespace holds child namespaces and commands in two separate mappings, so a
namespace and a command may share a local name. Lookups are one level deep;
the Runner walks the tree segment by segment.

Example
    >>> root = Namespace("default")
    >>> servers = Namespace("servers")
    >>> root.insert(servers).lookup_namespace("servers") is servers
    True
    >>> servers.full_name("create")
    'servers:create'
"""
from .utils import *


class Namespace(metaclass=IntrospectableType):
    """
    Named scope holding child namespaces and commands.

    Invariants
    - The tree is acyclic: a namespace receives its parent once, when inserted,
      and is never re-parented.
    - The parentless namespace (the root) contributes nothing to full names.
    """

    __introspectable__ = (
        "name",
        "parent",
        "namespaces",
        "commands",
    )

    __displayable__ = (
        "name",
        "namespaces",
        "commands",
    )

    def __init__(self, name=None):
        if name is not None and not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        self._name = name
        self._parent = None
        self._namespaces = {}
        self._commands = {}

    def insert(self, child):
        """
        Add a Namespace or a Command to this namespace.

        Namespaces get their parent set to self. A later insert with the same
        name replaces the previous entry of the same kind.

        Returns self, to allow chaining.
        """
        if isinstance(child, Namespace):
            if child is self or child in self.ancestors():
                raise ValueError(f"{type(self).__typename__} cannot contain itself")
            if child.parent is not None and child.parent is not self:
                raise ValueError(f"{type(self).__typename__} {child.name!r} already belongs to another namespace")
            child._parent = self
            self._namespaces[child.name] = child
        else:
            self._commands[str(child.name)] = child
        return self

    def lookup_command(self, name):
        """
        Return the command named `name` in this namespace, or None.
        """
        return self._commands.get(str(name))

    def lookup_namespace(self, name):
        """
        Return the child namespace named `name`, or None.
        """
        return self._namespaces.get(str(name))

    def ancestors(self):
        """
        Return the chain of parents, nearest first.
        """
        ancestors = []
        parent = self._parent
        while parent is not None:
            ancestors.append(parent)
            parent = parent.parent
        return ancestors

    def full_name(self, suffix=None):
        """
        Join ancestor names and this namespace's name with ':', ancestor first.

        The root contributes nothing; `suffix` (usually a command name) is
        appended when given.

        Examples
        - root → a → b → c: c.full_name() == "a:b:c"
        - c.full_name("zebra") == "a:b:c:zebra"
        - root.full_name() == ""
        """
        parts = [namespace.name for namespace in reversed([self, *self.ancestors()]) if namespace.parent is not None]
        if suffix is not None:
            parts.append(str(suffix))
        return ":".join(parts)

    def list_commands_with_descriptions(self):
        """
        Return (full name, description) pairs of every command reachable from here.

        Own commands come first, then each child namespace depth-first; the
        result is sorted by full name then description.
        """
        items = [(command.full_name, command.description) for command in self._commands.values()]
        for namespace in self._namespaces.values():
            items.extend(namespace.list_commands_with_descriptions())
        return sorted(items, key=lambda item: (item[0], coalesce(item[1], "") or ""))


__all__ = (
    "Namespace",
)
