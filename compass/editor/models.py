"""Editor buffer and action types."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class EditBuffer(BaseModel):
    """Text plus a selection range, ``0 <= start <= end <= len(text)``."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    selection_start: int = 0
    selection_end: int = 0

    @model_validator(mode="after")
    def _check_selection(self) -> EditBuffer:
        if not 0 <= self.selection_start <= self.selection_end <= len(self.text):
            raise ValueError(
                f"Selection ({self.selection_start}, {self.selection_end}) "
                f"outside buffer of length {len(self.text)}"
            )
        return self

    @classmethod
    def at(cls, text: str, cursor: int) -> EditBuffer:
        """Buffer with a collapsed cursor."""
        return cls(text=text, selection_start=cursor, selection_end=cursor)

    @property
    def selected(self) -> str:
        return self.text[self.selection_start:self.selection_end]

    @property
    def selection(self) -> tuple[int, int]:
        return (self.selection_start, self.selection_end)


class FormatAction(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    LINK = "link"
    HEADING = "heading"
    UNORDERED_LIST = "unordered-list"
    CHECKLIST = "checklist"
    QUOTE = "quote"

    @classmethod
    def _missing_(cls, value: object) -> FormatAction | None:
        if value == "ul":
            return cls.UNORDERED_LIST
        return None


# Ctrl/Cmd + key
SHORTCUTS: dict[str, FormatAction] = {
    "b": FormatAction.BOLD,
    "i": FormatAction.ITALIC,
    "k": FormatAction.LINK,
}


def action_for_shortcut(key: str) -> FormatAction | None:
    return SHORTCUTS.get(key.lower())
