"""Classification of blueprint text into typed layout blocks.

The renderer never inspects raw text: a classifier first turns each
paragraph unit into a ``Block`` tagged with its ``BlockKind``, and the
renderer maps each kind to a style.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

_UNIT_SPLIT_RE = re.compile(r"\n+")
_HEADING_MARKER_RE = re.compile(r"^#+\s*")
_NUMBERED_RE = re.compile(r"^\d+\.")
_ROMAN_HEADING_RE = re.compile(r"^[IVXLC]+\.\s+\S")
_BULLET_MARKERS = ("- ", "* ")


class BlockKind(str, Enum):
    TITLE = "title"
    DISCOUNT = "discount"
    HEADING = "heading"
    BULLET = "bullet"
    NUMBERED = "numbered"
    PARAGRAPH = "paragraph"
    CALL_TO_ACTION = "call_to_action"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str


def split_units(text: str) -> list[str]:
    """Split text on runs of newlines, dropping blank units."""
    units = (unit.strip() for unit in _UNIT_SPLIT_RE.split(text or ""))
    return [unit for unit in units if unit]


class BlockClassifier(Protocol):
    """Strategy that classifies one paragraph unit."""

    def classify(self, unit: str) -> Block | None: ...


class MarkdownClassifier:
    """
    Classify units by their markdown-ish prefix.

    Rules, first match wins:
    - wrapped in ``**`` on both ends -> heading, markers stripped
    - starts with "- " or "* " -> bullet, marker stripped
    - starts with "#" -> heading, markers stripped
    - starts with digits and a period -> numbered, text kept as-is
    - anything else -> paragraph

    Returns None for units that are empty once markers are removed.
    """

    def classify(self, unit: str) -> Block | None:
        unit = unit.strip()
        if not unit:
            return None

        if len(unit) >= 4 and unit.startswith("**") and unit.endswith("**"):
            return _block(BlockKind.HEADING, unit.replace("**", ""))
        if unit.startswith(_BULLET_MARKERS):
            return _block(BlockKind.BULLET, unit[2:])
        if unit.startswith("#"):
            return _block(BlockKind.HEADING, _HEADING_MARKER_RE.sub("", unit))
        if _NUMBERED_RE.match(unit):
            return _block(BlockKind.NUMBERED, unit)
        return _block(BlockKind.PARAGRAPH, unit)


class OutlineClassifier(MarkdownClassifier):
    """
    Markdown rules plus outline-style heading detection.

    Units like "IV. Site Map" and short ALL-CAPS lines such as
    "CONTENT STRATEGY" are treated as headings.
    """

    max_caps_heading_words = 8

    def classify(self, unit: str) -> Block | None:
        block = super().classify(unit)
        if block is None or block.kind is not BlockKind.PARAGRAPH:
            return block

        text = block.text
        if _ROMAN_HEADING_RE.match(text) or self._is_caps_heading(text):
            return Block(BlockKind.HEADING, text.rstrip(":"))
        return block

    def _is_caps_heading(self, text: str) -> bool:
        letters = [c for c in text if c.isalpha()]
        if len(letters) < 3 or not all(c.isupper() for c in letters):
            return False
        return len(text.split()) <= self.max_caps_heading_words


CLASSIFIERS: dict[str, type[MarkdownClassifier]] = {
    "markdown": MarkdownClassifier,
    "outline": OutlineClassifier,
}


def get_classifier(strategy: str) -> BlockClassifier:
    """
    Look up a classification strategy by name.

    Raises:
        ValueError: If the strategy is unknown
    """
    try:
        return CLASSIFIERS[strategy.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown heading strategy {strategy!r}, expected one of {sorted(CLASSIFIERS)}"
        ) from None


def classify_blueprint(text: str, classifier: BlockClassifier | None = None) -> list[Block]:
    """Classify every paragraph unit of ``text`` in original order."""
    classifier = classifier or MarkdownClassifier()
    blocks = []
    for unit in split_units(text):
        block = classifier.classify(unit)
        if block is not None:
            blocks.append(block)
    return blocks


def _block(kind: BlockKind, text: str) -> Block | None:
    text = text.strip()
    return Block(kind, text) if text else None
