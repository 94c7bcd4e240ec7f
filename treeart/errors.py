# treeart/errors.py

from __future__ import annotations


class TreeModelError(Exception):
    """Base exception for tree construction and query errors."""
    pass


class InvalidParentError(TreeModelError):
    """Raised in strict mode when a parent id is unknown or refers to a leaf."""

    def __init__(self, parent_id: int, reason: str) -> None:
        self.parent_id = parent_id
        self.reason = reason
        super().__init__(f"Invalid parent {parent_id}: {reason}")


class UnknownItemError(TreeModelError, KeyError):
    """Raised when an operation requires an item id that the model never assigned."""

    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__(f"Item {item_id} does not exist in the tree")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class EmptyLeafError(TreeModelError, ValueError):
    """Raised when a leaf is created without any lines of text."""
    pass
