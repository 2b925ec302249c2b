"""Markdown formatting of a text buffer around a selection.

Every action except ``heading`` reduces to an ``_Edit``: text inserted
before, in place of, and after the selection. The edit also says where
the selection goes afterwards. ``heading`` rewrites the current line's
prefix instead.
"""

from __future__ import annotations

from typing import NamedTuple

from compass.editor.models import EditBuffer, FormatAction

# marker, placeholder
_WRAPS: dict[FormatAction, tuple[str, str]] = {
    FormatAction.BOLD: ("**", "bold text"),
    FormatAction.ITALIC: ("*", "italic text"),
    FormatAction.STRIKETHROUGH: ("~~", "strikethrough"),
    FormatAction.CODE: ("`", "code"),
}

# line prefix, placeholder
_LINE_PREFIXES: dict[FormatAction, tuple[str, str]] = {
    FormatAction.UNORDERED_LIST: ("- ", "list item"),
    FormatAction.CHECKLIST: ("- [ ] ", "task item"),
    FormatAction.QUOTE: ("> ", "quote"),
}

LINK_PLACEHOLDER = "[link text](url)"

_HEADING_CYCLE: list[tuple[str, str]] = [
    ("### ", ""),
    ("## ", "### "),
    ("# ", "## "),
]
_DEFAULT_HEADING = "## "


class _Edit(NamedTuple):
    before: str
    insert: str
    after: str
    # None selects ``insert``; an int collapses the cursor that far into it.
    cursor_offset: int | None = None


def apply_format(buffer: EditBuffer, action: FormatAction | str) -> EditBuffer:
    """Apply a formatting action and return the resulting buffer."""
    action = FormatAction(action)
    if action is FormatAction.HEADING:
        return _cycle_heading(buffer)
    return _apply_edit(buffer, _plan_edit(buffer, action))


def _plan_edit(buffer: EditBuffer, action: FormatAction) -> _Edit:
    selected = buffer.selected

    if action in _WRAPS:
        marker, placeholder = _WRAPS[action]
        return _Edit(marker, selected or placeholder, marker)

    if action is FormatAction.LINK:
        if selected:
            return _Edit("[", selected, "](url)")
        return _Edit("", LINK_PLACEHOLDER, "", cursor_offset=1)

    prefix, placeholder = _LINE_PREFIXES[action]
    lines = (selected or placeholder).split("\n")
    block = "\n".join(prefix + line for line in lines)
    start = buffer.selection_start
    needs_break = start > 0 and buffer.text[start - 1] != "\n"
    return _Edit("\n" if needs_break else "", block, "")


def _apply_edit(buffer: EditBuffer, edit: _Edit) -> EditBuffer:
    start, end = buffer.selection
    text = buffer.text[:start] + edit.before + edit.insert + edit.after + buffer.text[end:]
    inner = start + len(edit.before)
    if edit.cursor_offset is not None:
        return EditBuffer.at(text, inner + edit.cursor_offset)
    return EditBuffer(text=text, selection_start=inner, selection_end=inner + len(edit.insert))


def _cycle_heading(buffer: EditBuffer) -> EditBuffer:
    """Advance the current line through none → ## → ### → none.

    Only the text from the line start to the selection end is inspected,
    so a multi-line selection rewrites the first line alone.
    """
    text = buffer.text
    start, end = buffer.selection
    line_start = text.rfind("\n", 0, start) + 1
    line = text[line_start:end]

    for old, new in _HEADING_CYCLE:
        if line.startswith(old):
            line = new + line[len(old):]
            delta = len(new) - len(old)
            break
    else:
        line = _DEFAULT_HEADING + line
        delta = len(_DEFAULT_HEADING)

    new_text = text[:line_start] + line + text[end:]
    cursor = min(max(start + delta, line_start), len(new_text))
    return EditBuffer.at(new_text, cursor)
