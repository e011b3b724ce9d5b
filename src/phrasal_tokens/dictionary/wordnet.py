"""WordNet dictionary backend.

Phrasal verbs are WordNet lemmas with underscores ("look_up", "put_up_with"),
so a candidate phrase is confirmed when WordNet has a synset for it with the
POS of the head verb. Lookup errors (e.g., the corpus is not downloaded) are
not swallowed: a failing dictionary must abort the grouping pass.
"""

from __future__ import annotations

from typing import List, Optional

from nltk.corpus import wordnet as wn
from nltk.corpus.reader.wordnet import Synset

from ..constants import PENN_TO_WORDNET_POS
from ..tokens import Definition
from .base import DictionaryBackend, normalize_phrase


def map_penn_pos_to_wordnet(penn_pos: str | None) -> Optional[str]:
    """Map a Penn Treebank tag to a WordNet POS tag.

    Examples:
        >>> map_penn_pos_to_wordnet("VBD")
        'v'
        >>> map_penn_pos_to_wordnet("RP")
        'r'
        >>> map_penn_pos_to_wordnet("DT") is None
        True
    """
    if not penn_pos:
        return None
    tag = penn_pos.upper()
    for prefix, wordnet_pos in PENN_TO_WORDNET_POS.items():
        if tag.startswith(prefix):
            return wordnet_pos
    return None


def get_synsets(phrase: str, pos: Optional[str] = None) -> List[Synset]:
    """Get WordNet synsets for a (possibly multi-word) phrase.

    Args:
        phrase: The phrase to look up (case-insensitive).
                Spaces are converted to underscores.
        pos: WordNet POS tag ('n', 'v', 'a', 'r') or None for all POS

    Returns:
        List of Synset objects, empty list if the phrase is not in WordNet
    """
    if not phrase or not phrase.strip():
        return []
    return list(wn.synsets(normalize_phrase(phrase).replace(" ", "_"), pos=pos))


def get_definition(synset: Synset) -> str:
    """Get definition for a synset, falling back to its lemma names."""
    definition = synset.definition()
    if definition and definition.strip():
        return definition.strip()
    lemma_names = synset.lemma_names()
    if lemma_names:
        return ", ".join(name.replace("_", " ") for name in lemma_names)
    return synset.name()


class WordNetDictionary(DictionaryBackend):
    """Dictionary backed by NLTK's WordNet corpus.

    The first synset is used, as WordNet orders synsets by frequency.
    """

    async def lookup(self, phrase: str, pos: str | None = None) -> Definition | None:
        synsets = get_synsets(phrase, pos=map_penn_pos_to_wordnet(pos))
        if not synsets:
            return None
        synset = synsets[0]
        return Definition(text=get_definition(synset), synset_id=synset.name(), pos=synset.pos())

    async def related_terms(self, phrase: str, pos: str | None = None) -> List[str]:
        """Hypernym lemma names of the most common synset."""
        synsets = get_synsets(phrase, pos=map_penn_pos_to_wordnet(pos))
        if not synsets:
            return []
        related: List[str] = []
        for hypernym in synsets[0].hypernyms():
            for name in hypernym.lemma_names():
                term = name.replace("_", " ")
                if term not in related:
                    related.append(term)
        return related

    @property
    def name(self) -> str:
        return "wordnet"
