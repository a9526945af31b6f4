"""
Plain-text table formatter used by the command listing.

    >>> table = TableView(title="tool commands:", headers=("Command", "Description"), divider="\\t")
    >>> table.add_record("servers:create", "Create a server")
    >>> print(table)
"""
from rich.text import Text

from .faults import InvalidDataForColumnsError
from .utils import *

DEFAULT_DIVIDER = " | "


class TableView(metaclass=IntrospectableType):
    """
    Columns are left-justified to their widest cell; None renders as empty.
    """

    __introspectable__ = (
        "headers",
        "records",
    )

    __mutable__ = (
        "title",
        "divider",
    )

    def __init__(self, title=Unset, headers=(), divider=DEFAULT_DIVIDER):
        self._title = coalesce(title, "")
        self._headers = []
        self._records = []
        self._divider = divider
        self.add_header(*headers)

    def add_header(self, *headers):
        self._headers.extend(flatten(headers))
        return self

    def add_record(self, *values):
        values = list(flatten(values))
        if len(values) != len(self._headers):
            raise InvalidDataForColumnsError(len(values), len(self._headers))
        self._records.append(["" if value is None else str(value) for value in values])
        return self

    def _widths(self):
        widths = [len(str(header)) for header in self._headers]
        for record in self._records:
            for index, value in enumerate(record):
                widths[index] = max(widths[index], len(value))
        return widths

    def _row(self, values, widths):
        return self._divider.join(str(value).ljust(width) for value, width in zip(values, widths))

    def __str__(self):
        widths = self._widths()
        lines = []
        if self._title:
            lines.append(str(self._title))
        lines.append(self._row(self._headers, widths))
        lines.extend(self._row(record, widths) for record in self._records)
        return "\n".join(lines) + "\n\n"

    def __rich__(self):
        return Text(str(self))


__all__ = (
    "TableView",
    "DEFAULT_DIVIDER",
)
