"""Loaders for labeled training corpora.

Two line-oriented formats are supported:

- JSON Lines (``.jsonl``): one object per line with ``text`` and ``label``
  string fields.
- Tab-separated (``.tsv``, ``.txt``): ``label<TAB>text`` per line. Only the
  first tab separates the label; the text may contain further tabs.

Blank lines are skipped in both formats.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .exceptions import CorpusFormatError

JSONL_EXTENSIONS: tuple[str, ...] = (".jsonl", ".ndjson")
TSV_EXTENSIONS: tuple[str, ...] = (".tsv", ".txt")


@dataclass(frozen=True)
class LabeledDocument:
    """A training document and its class label."""

    text: str
    label: str


def read_jsonl(lines: Iterable[str]) -> list[LabeledDocument]:
    """Parse JSON Lines records into labeled documents.

    Raises:
        CorpusFormatError: If a line is not an object with string
            ``text`` and ``label`` fields.
    """
    documents: list[LabeledDocument] = []
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise CorpusFormatError(f"invalid JSON ({e.msg})", line_number) from e
        if not isinstance(record, dict):
            raise CorpusFormatError("expected a JSON object", line_number)

        text = record.get("text")
        label = record.get("label")
        if not isinstance(text, str):
            raise CorpusFormatError("missing or non-string 'text' field", line_number)
        if not isinstance(label, str) or not label.strip():
            raise CorpusFormatError("missing or empty 'label' field", line_number)
        documents.append(LabeledDocument(text=text, label=label.strip()))
    return documents


def read_tsv(lines: Iterable[str]) -> list[LabeledDocument]:
    """Parse ``label<TAB>text`` lines into labeled documents.

    Raises:
        CorpusFormatError: If a non-blank line has no tab or an empty label.
    """
    documents: list[LabeledDocument] = []
    for line_number, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        label, sep, text = line.partition("\t")
        if not sep:
            raise CorpusFormatError("expected 'label<TAB>text'", line_number)
        label = label.strip()
        if not label:
            raise CorpusFormatError("empty label", line_number)
        documents.append(LabeledDocument(text=text, label=label))
    return documents


def load_corpus(path: str | Path) -> list[LabeledDocument]:
    """Load a labeled corpus, choosing the format from the file extension.

    Args:
        path: Path to a ``.jsonl`` or ``.tsv``/``.txt`` file.

    Returns:
        Documents in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is not supported.
        CorpusFormatError: If a record is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix in JSONL_EXTENSIONS:
        reader = read_jsonl
    elif suffix in TSV_EXTENSIONS:
        reader = read_tsv
    else:
        raise ValueError(
            f"Unsupported corpus extension '{path.suffix}'. "
            f"Supported: {JSONL_EXTENSIONS + TSV_EXTENSIONS}"
        )

    with open(path, "r", encoding="utf-8") as f:
        return reader(f)
