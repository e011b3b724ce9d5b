"""Token data model shared by every pipeline stage.

A token is either a plain word produced by the upstream tagger or a compound
token synthesized from two or more plain tokens (e.g. "look up"). Tokens travel
between stages as JSON objects with camelCase keys; this module converts
between that format, the :class:`Token` dataclass, and pandas DataFrames.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Sequence

import pandas as pd

from .constants import (
    CONSTITUENT_COUNT,
    CONTEXT_ID,
    CONTEXT_ID_COLUMN,
    DEFINITION,
    ENCODING_UTF8,
    END_OFFSET,
    END_OFFSET_COLUMN,
    FREQUENCY,
    IS_COMPOUND,
    JOIN_SEPARATOR,
    LEMMA,
    NORMAL,
    POS,
    RANK,
    START_OFFSET,
    START_OFFSET_COLUMN,
    TAG,
    TOKEN_COLUMNS,
    TOKENS,
    VALUE,
)


@dataclass
class Definition:
    """Dictionary definition attached to a token.

    Attributes:
        text: The gloss
        synset_id: Identifier of the dictionary entry (e.g., "look_up.v.01")
        pos: Dictionary POS of the entry ('n', 'v', 'a', 'r')
        related: Terms reached through dictionary pointers (e.g., hypernyms);
                 empty when pointers are skipped
    """

    text: str
    synset_id: str | None = None
    pos: str | None = None
    related: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        data: dict[str, Any] = {"text": self.text}
        if self.synset_id is not None:
            data["synsetId"] = self.synset_id
        if self.pos is not None:
            data["pos"] = self.pos
        if self.related:
            data["related"] = list(self.related)
        return data

    @classmethod
    def from_dict(cls, d: dict[str, Any] | str) -> "Definition":
        """Deserialize from dictionary (a bare string is taken as the gloss)."""
        if isinstance(d, str):
            return cls(text=d)
        return cls(
            text=d["text"],
            synset_id=d.get("synsetId"),
            pos=d.get("pos"),
            related=list(d.get("related", [])),
        )


@dataclass
class Token:
    """Atomic or compound unit of the token stream.

    Attributes:
        value: Original surface text
        normal: Normalized surface text
        lemma: Dictionary base form
        pos: Penn Treebank tag (VB* = verb, RP = particle, IN = preposition)
        context_id: Opaque id of the syntactic unit (sentence, clause)
        start_offset: Character offset of the first character, if tracked
        end_offset: Character offset after the last character, if tracked
        tokens: Constituents of a compound token, left to right
        frequency: Occurrences of the same compound lemma in the stream (>= 2)
        definition: Definition set by the definition enrichment
        rank: Rank set by the rank enrichment
        tag: Token kind marker ("word" for compounds)
    """

    value: str
    normal: str = ""
    lemma: str = ""
    pos: str | None = None
    context_id: Any = None
    start_offset: int | None = None
    end_offset: int | None = None
    tokens: list["Token"] | None = None
    frequency: int | None = None
    definition: Definition | None = None
    rank: int | float | None = None
    tag: str | None = None

    @property
    def is_compound(self) -> bool:
        return bool(self.tokens)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire format, omitting absent fields."""
        data: dict[str, Any] = {VALUE: self.value, NORMAL: self.normal, LEMMA: self.lemma}
        if self.tag is not None:
            data[TAG] = self.tag
        if self.pos is not None:
            data[POS] = self.pos
        if self.context_id is not None:
            data[CONTEXT_ID] = self.context_id
        if self.start_offset is not None:
            data[START_OFFSET] = self.start_offset
        if self.end_offset is not None:
            data[END_OFFSET] = self.end_offset
        if self.tokens:
            data[TOKENS] = [token.to_dict() for token in self.tokens]
        if self.frequency is not None:
            data[FREQUENCY] = self.frequency
        if self.definition is not None:
            data[DEFINITION] = self.definition.to_dict()
        if self.rank is not None:
            data[RANK] = self.rank
        return data

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Token":
        """Deserialize from the wire format."""
        if VALUE not in d:
            raise ValueError(f"token is missing required key '{VALUE}': {d}")

        value = str(d[VALUE])
        normal = d.get(NORMAL, value)
        definition = d.get(DEFINITION)
        tokens = d.get(TOKENS)
        return cls(
            value=value,
            normal=normal,
            lemma=d.get(LEMMA, normal),
            pos=d.get(POS),
            context_id=d.get(CONTEXT_ID),
            start_offset=d.get(START_OFFSET),
            end_offset=d.get(END_OFFSET),
            tokens=[cls.from_dict(t) for t in tokens] if tokens else None,
            frequency=d.get(FREQUENCY),
            definition=Definition.from_dict(definition) if definition else None,
            rank=d.get(RANK),
            tag=d.get(TAG),
        )


def join_field(tokens: Iterable[Token], field_name: str, separator: str = JOIN_SEPARATOR) -> str:
    """Join one attribute over tokens; missing values count as empty strings.

    Examples:
        >>> join_field([Token("put", lemma="put"), Token("up", lemma="up")], "lemma")
        'put up'
    """
    return separator.join(str(getattr(token, field_name, None) or "") for token in tokens)


def tokens_from_dicts(records: Iterable[dict[str, Any]]) -> List[Token]:
    return [Token.from_dict(record) for record in records]


def tokens_to_dicts(tokens: Iterable[Token]) -> List[dict[str, Any]]:
    return [token.to_dict() for token in tokens]


def load_tokens_json(file_path: Path) -> List[Token]:
    """Load a token stream from a JSON array."""

    if not file_path.exists():
        raise FileNotFoundError(file_path)

    with open(file_path, "r", encoding=ENCODING_UTF8) as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{file_path} must contain a JSON array of tokens")
    return tokens_from_dicts(data)


def save_tokens_json(tokens: Sequence[Token], output_path: Path) -> None:
    """Persist a token stream as a JSON array."""

    if tokens is None:
        raise ValueError("tokens must not be None")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding=ENCODING_UTF8) as f:
        json.dump(tokens_to_dicts(tokens), f, indent=2, ensure_ascii=False)


def tokens_to_dataframe(tokens: Sequence[Token]) -> pd.DataFrame:
    """Flatten a token stream into one DataFrame row per token."""

    if tokens is None:
        raise ValueError("tokens must not be None")

    records = [
        {
            VALUE: token.value,
            NORMAL: token.normal,
            LEMMA: token.lemma,
            POS: token.pos,
            CONTEXT_ID_COLUMN: token.context_id,
            START_OFFSET_COLUMN: token.start_offset,
            END_OFFSET_COLUMN: token.end_offset,
            IS_COMPOUND: token.is_compound,
            CONSTITUENT_COUNT: len(token.tokens) if token.tokens else 1,
            FREQUENCY: token.frequency,
            DEFINITION: token.definition.text if token.definition else None,
            RANK: token.rank,
        }
        for token in tokens
    ]
    return pd.DataFrame(records, columns=TOKEN_COLUMNS)
