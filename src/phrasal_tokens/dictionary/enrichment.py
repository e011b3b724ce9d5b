"""Definition and rank enrichment for tokens."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Mapping, Sequence

from wordfreq import top_n_list

from ..constants import LANGUAGE_EN
from ..tokens import Token
from .base import DictionaryBackend


async def add_definition(
    tokens: Sequence[Token],
    dictionary: DictionaryBackend,
    *,
    skip_pointers: bool = True,
) -> List[Token]:
    """Return tokens with ``definition`` looked up by lemma.

    Tokens that already carry a definition are not looked up again. Tokens
    the dictionary does not know are returned unchanged. When
    ``skip_pointers`` is False the definition also lists related terms
    reached through dictionary pointers.
    """
    enriched: List[Token] = []
    for token in tokens:
        definition = token.definition
        if definition is None:
            definition = await dictionary.lookup(token.lemma, pos=token.pos)
        if definition is None:
            enriched.append(token)
            continue
        if not skip_pointers:
            related = await dictionary.related_terms(token.lemma, pos=token.pos)
            definition = replace(definition, related=related)
        enriched.append(replace(token, definition=definition))
    return enriched


def lookup_rank(token: Token, words_rank: Mapping[str, int | float]) -> int | float | None:
    """Rank of a token by normalized form.

    Word-frequency tables hold single words, so a compound missing from the
    table falls back to its head verb (normal form first, then lemma).
    """
    keys = [token.normal]
    if token.tokens:
        head = token.tokens[0]
        keys.extend([head.normal, head.lemma])
    for key in keys:
        rank = words_rank.get((key or "").lower())
        if rank is not None:
            return rank
    return None


async def add_rank(tokens: Sequence[Token], words_rank: Mapping[str, int | float]) -> List[Token]:
    """Return tokens with ``rank`` taken from ``words_rank``."""
    enriched: List[Token] = []
    for token in tokens:
        rank = lookup_rank(token, words_rank)
        enriched.append(replace(token, rank=rank) if rank is not None else token)
    return enriched


def build_words_rank(top_n: int, language: str = LANGUAGE_EN) -> Dict[str, int]:
    """Build a 1-based rank table from wordfreq's most frequent words."""

    if top_n <= 0:
        raise ValueError("top_n must be positive")

    return {word: rank for rank, word in enumerate(top_n_list(language, top_n), start=1)}
