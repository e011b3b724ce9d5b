"""Base classes for dictionary lookup backends.

The grouping stage only asks a dictionary whether a phrase has a definition.
This module defines that interface so different dictionaries (WordNet, a user
glossary, a remote service) can be used interchangeably.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping

import pandas as pd

from ..constants import DEFINITION, PHRASE
from ..tokens import Definition


def normalize_phrase(phrase: str) -> str:
    """Lowercase and collapse whitespace so lookups ignore spacing and case."""
    return " ".join(phrase.lower().split())


class DictionaryBackend(ABC):
    """Abstract base class for dictionary lookup backends.

    Usage:
        dictionary = WordNetDictionary()
        definition = await dictionary.lookup("look up", pos="VB")
    """

    @abstractmethod
    async def lookup(self, phrase: str, pos: str | None = None) -> Definition | None:
        """Look up a phrase.

        Args:
            phrase: Space-separated lemmas (e.g., "put up with")
            pos: Penn Treebank tag of the head word, used to narrow the lookup

        Returns:
            The definition, or None when the phrase is not an entry

        Raises:
            Any backend failure propagates to the caller
        """
        pass

    async def related_terms(self, phrase: str, pos: str | None = None) -> List[str]:
        """Terms reached through dictionary pointers. Default: none."""
        return []

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this backend for logging/display."""
        pass


class MappingDictionary(DictionaryBackend):
    """In-memory dictionary backed by a ``{phrase: gloss}`` mapping."""

    def __init__(self, entries: Mapping[str, str]) -> None:
        self._entries = {normalize_phrase(phrase): gloss for phrase, gloss in entries.items()}

    async def lookup(self, phrase: str, pos: str | None = None) -> Definition | None:
        gloss = self._entries.get(normalize_phrase(phrase))
        if not gloss:
            return None
        return Definition(text=gloss)

    @property
    def name(self) -> str:
        return "mapping"

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_csv(cls, csv_path: Path | str) -> "MappingDictionary":
        """Load a glossary CSV with ``phrase`` and ``definition`` columns."""
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(path)

        try:
            df = pd.read_csv(path)
        except pd.errors.EmptyDataError:
            return cls({})

        missing = {PHRASE, DEFINITION} - set(df.columns)
        if missing:
            raise ValueError(f"glossary {path} is missing required columns: {missing}")

        df = df.dropna(subset=[PHRASE, DEFINITION])
        return cls(dict(zip(df[PHRASE].astype(str), df[DEFINITION].astype(str))))
