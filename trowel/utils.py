"""
Small helpers shared by every trowel module.

- Unset / UnsetType: the "not given" sentinel. None, 0 and "" are real values
  (a parameter default of None is still a default), so they cannot mark absence.
- coalesce(): swap Unset for a fallback.
- flatten(): splice nested lists/tuples into one stream of values.
- rename(): give generated callables readable names.
- mirror() / IntrospectableType: publish private "_field" attributes as
  properties and derive __repr__ / __rich_repr__ from them.

Only the names in __all__ are meant to be imported elsewhere.
"""
import builtins
import functools
import re
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    There is exactly one instance; it is falsey, prints as "Unset" and can be
    used in PEP 604 unions (``str | Unset``) for isinstance() checks.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `object`, or `default` when `object` is Unset.

        >>> coalesce(Unset, "west"), coalesce(None, "west")
        ('west', None)
    """
    return default if object is Unset else object


def flatten(inputs, /):
    """
    Yield the items of nested lists and tuples as one flat sequence.

    Strings, mappings and every other object are yielded unchanged.
    """
    for input in inputs:
        if isinstance(input, list | tuple):
            yield from flatten(input)
        else:
            yield input


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns the callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("@rename() argument must be a string")

        def decorator(callable, /):
            return _rename(callable, name=name)

        return _rename(decorator, name="rename")

    if len(parameters) != 2:
        raise TypeError("rename() takes 1 or 2 arguments but %d were given" % len(parameters))

    callable, name = parameters
    return _rename(callable, name=name)


def _rename(callable, /, *, name):
    if not builtins.callable(callable):
        raise TypeError("rename() target must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() target must accept a new name") from None
    return callable


def _copy(object):
    # containers come back as fresh shallow copies, strings and scalars as-is
    if isinstance(object, Mapping):
        return dict(object)
    if isinstance(object, Set):
        return set(object)
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(object)
    return object


def mirror(name, /, *, writable=False):
    """
    Property reading (and, when `writable`, assigning) the "_<name>" attribute.

    Container values are returned as copies so callers cannot edit the
    owner's state through them.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    attribute = "_" + name

    @rename(name)
    def getter(self):
        return _copy(getattr(self, attribute))

    if not writable:
        return property(getter)

    @rename(name)
    def setter(self, value):
        setattr(self, attribute, value)

    return property(getter, setter)


class IntrospectableType(type):
    """
    Metaclass for the public trowel types.

    A class declares
    - __introspectable__: fields exposed read-only,
    - __mutable__: fields exposed read-write,
    - __displayable__ (optional): the fields shown by __repr__ / __rich_repr__;
      every exposed field otherwise.

    The class also gets __typename__, its name in kebab case ("OptionParser"
    becomes "option-parser"), used as the label in messages.
    """
    __introspectable__ = ()
    __mutable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        fields = {"__typename__": re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower()}
        for field in namespace.get("__introspectable__", ()):
            fields[field] = mirror(field)
        for field in namespace.get("__mutable__", ()):
            fields[field] = mirror(field, writable=True)

        self = super().__new__(cls, name, bases, namespace | fields, **options)

        if "__rich_repr__" not in namespace:
            self.__rich_repr__ = rename(_rich_repr, "__rich_repr__")
        if "__repr__" not in namespace:
            self.__repr__ = rename(_repr, "__repr__")
        return self


def _rich_repr(self):
    kind = type(self)
    for name in coalesce(kind.__displayable__, (*kind.__introspectable__, *kind.__mutable__)):
        yield name, getattr(self, name)


def _repr(self):
    fields = ", ".join("%s=%r" % field for field in self.__rich_repr__())
    return "%s(%s)" % (type(self).__typename__, fields)


__all__ = (
    # Functions
    "coalesce",
    "flatten",
    "rename",
    "mirror",

    # Types
    "UnsetType",
    "IntrospectableType",

    # Constants
    "Unset",
)
