"""Word tokenization for bag-of-words models.

Text is split on whitespace and punctuation: a token is a maximal run of
Unicode letters or digits. Underscores count as separators, so
``"ham_hock"`` yields ``["ham", "hock"]``. Tokens are lower-cased unless
the tokenizer is configured otherwise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WORD_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> list[str]:
    """Extract lowercase word tokens from text."""
    return [m.group().lower() for m in _WORD_RE.finditer(text)]


@dataclass(frozen=True)
class Tokenizer:
    """Configurable word tokenizer.

    Args:
        lowercase: Fold tokens to lower case for case-insensitive matching.
    """

    lowercase: bool = True

    def tokenize(self, text: str) -> list[str]:
        """Split ``text`` into a list of tokens.

        Any string, including the empty string, is valid input. The result
        is a fresh list each call, and the same text always produces the
        same tokens in the same order.
        """
        if self.lowercase:
            return tokenize(text)
        return _WORD_RE.findall(text)

    def to_dict(self) -> dict:
        return {"lowercase": self.lowercase}

    @classmethod
    def from_dict(cls, data: dict) -> "Tokenizer":
        return cls(lowercase=bool(data.get("lowercase", True)))
