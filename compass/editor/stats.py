"""Word and character counts for the editor status line."""

from __future__ import annotations

from pydantic import BaseModel


class TextStats(BaseModel):
    words: int
    chars: int

    def label(self) -> str:
        words = f"{self.words} word{'' if self.words == 1 else 's'}"
        chars = f"{self.chars} char{'' if self.chars == 1 else 's'}"
        return f"{words} · {chars}"


def text_stats(text: str) -> TextStats:
    return TextStats(words=len(text.split()), chars=len(text))
