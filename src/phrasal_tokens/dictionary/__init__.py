"""Dictionary lookup and token enrichment.

Main components:
- DictionaryBackend: Abstract base class for dictionary backends
- MappingDictionary: In-memory glossary
- WordNetDictionary: NLTK WordNet backend
- add_definition / add_rank: Enrichment of (compound) tokens
"""

from .base import DictionaryBackend, MappingDictionary, normalize_phrase
from .enrichment import add_definition, add_rank, build_words_rank
from .wordnet import WordNetDictionary, get_synsets, map_penn_pos_to_wordnet

__all__ = [
    # Base
    "DictionaryBackend",
    "MappingDictionary",
    "normalize_phrase",
    # WordNet
    "WordNetDictionary",
    "get_synsets",
    "map_penn_pos_to_wordnet",
    # Enrichment
    "add_definition",
    "add_rank",
    "build_words_rank",
]
