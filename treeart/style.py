# treeart/style.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TreeStyle(Enum):
    """The predefined glyph sets a StyleConfig can be created from."""
    UNICODE = "unicode"
    ASCII = "ascii"
    BOX = "box"


@dataclass(frozen=True)
class StyleConfig:
    """
    The four glyph strings used to draw one level of tree indentation.

    'frozen=True' makes instances immutable, so a single style can be shared
    by every prefix a model computes.

    Attributes:
        branch (str): Connector for a child that has later siblings.
        last (str): Connector for the last child of its parent.
        vertical (str): Continuation drawn under an ancestor that has later siblings.
        empty (str): Blank indentation drawn under an ancestor that was the last child.
    """
    branch: str = " ├─"
    last: str = " └─"
    vertical: str = " │ "
    empty: str = "   "

    @classmethod
    def unicode(cls) -> "StyleConfig":
        return cls()

    @classmethod
    def ascii(cls) -> "StyleConfig":
        return cls(branch=" +-", last=" `-", vertical=" | ", empty="   ")

    @classmethod
    def box_drawing(cls) -> "StyleConfig":
        return cls(branch=" ├─", last=" └─", vertical=" │ ", empty="   ")

    @classmethod
    def custom(cls, branch: str, last: str, vertical: str, empty: str) -> "StyleConfig":
        """Creates a style from four arbitrary glyph strings."""
        return cls(branch=branch, last=last, vertical=vertical, empty=empty)

    @classmethod
    def from_style(cls, style: "Union[StyleConfig, TreeStyle, str, None]" = None) -> "StyleConfig":
        """
        Resolves a style specification into a StyleConfig.

        Args:
            style: An existing StyleConfig (returned unchanged), a TreeStyle member,
                   a preset name such as "ascii" (case-insensitive), or None for the
                   default Unicode set.

        Returns:
            The matching StyleConfig.

        Raises:
            ValueError: If a preset name is not recognised.
        """
        if style is None:
            return cls.unicode()
        if isinstance(style, StyleConfig):
            return style
        if isinstance(style, str):
            try:
                style = TreeStyle(style.strip().lower())
            except ValueError:
                choices = ", ".join(s.value for s in TreeStyle)
                raise ValueError(f"Unknown tree style '{style}'. Expected one of: {choices}") from None
        if style is TreeStyle.ASCII:
            return cls.ascii()
        if style is TreeStyle.BOX:
            return cls.box_drawing()
        return cls.unicode()

    def get_branch(self, is_last: bool) -> str:
        """Returns the connector for a child, depending on whether it is the last one."""
        return self.last if is_last else self.branch

    def get_vertical(self) -> str:
        return self.vertical

    def get_empty(self) -> str:
        return self.empty
