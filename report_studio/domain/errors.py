"""
Document errors

Structural failures raised by the editing session. Every one of them leaves
the session's current snapshot untouched.
"""


class DocumentError(Exception):
    """Base class for document editing errors."""

    pass


class IndexOutOfRangeError(DocumentError, IndexError):
    """
    Raised when a list member cannot be addressed.

    Attributes:
        list_name: Dotted name of the list (e.g. "invoice.items")
        key: The index or identifier that did not resolve
        length: Length of the list at the time of the call
    """

    def __init__(self, list_name: str, key: int | str, length: int):
        self.list_name = list_name
        self.key = key
        self.length = length
        if isinstance(key, int):
            message = f"{list_name}: index {key} out of range for list of length {length}"
        else:
            message = f"{list_name}: no entry with id {key!r}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError-style repr quoting is not wanted here
        return str(self.args[0])


class InvalidPathError(DocumentError, KeyError):
    """Raised when an update path or list name does not name an editable field."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")

    def __str__(self) -> str:
        return str(self.args[0])


class UnsupportedOperationError(DocumentError):
    """Raised when inserting into or removing from a fixed-size list."""

    pass
