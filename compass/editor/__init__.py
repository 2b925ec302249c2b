"""Cursor-aware Markdown formatting for generated text."""

from compass.editor.models import SHORTCUTS, EditBuffer, FormatAction, action_for_shortcut
from compass.editor.stats import TextStats, text_stats
from compass.editor.transform import apply_format

__all__ = [
    "SHORTCUTS",
    "EditBuffer",
    "FormatAction",
    "TextStats",
    "action_for_shortcut",
    "apply_format",
    "text_stats",
]
