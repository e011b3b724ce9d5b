"""spaCy-based tagging that produces the token stream for grouping."""

from __future__ import annotations

from functools import lru_cache
from typing import List

import spacy
from spacy.language import Language

from .constants import (
    COMPONENT_SENTER,
    DEFAULT_MODEL_NAME,
    SPACY_MAX_LENGTH,
    TOKENIZATION_DISABLED,
)
from .tokens import Token


@lru_cache
def initialize_spacy_model(model_name: str = DEFAULT_MODEL_NAME) -> Language:
    """Load and cache spaCy model."""

    nlp = spacy.load(model_name, disable=TOKENIZATION_DISABLED)
    if COMPONENT_SENTER in nlp.disabled:
        nlp.enable_pipe(COMPONENT_SENTER)
    nlp.max_length = max(nlp.max_length, SPACY_MAX_LENGTH)
    return nlp


def tokenize_text(
    text: str, nlp: Language, *, with_offset: bool = True, sentence_offset: int = 0
) -> List[Token]:
    """Tag text and return tokens with Penn tags and sentence context ids."""

    if text is None:
        raise ValueError("text must not be None")

    doc = nlp(text)
    tokens: List[Token] = []
    for context_id, sent in enumerate(doc.sents, start=sentence_offset):
        for token in sent:
            if token.is_space:
                continue
            tokens.append(
                Token(
                    value=token.text,
                    normal=token.norm_,
                    lemma=token.lemma_.lower(),
                    pos=token.tag_,
                    context_id=context_id,
                    start_offset=token.idx if with_offset else None,
                    end_offset=token.idx + len(token.text) if with_offset else None,
                )
            )
    return tokens
