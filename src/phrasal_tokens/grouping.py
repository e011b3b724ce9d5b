"""Group phrasal verbs (e.g. "come on", "look it up") into compound tokens.

The pass runs in three phases:

1. Scan: :func:`phrasal_tokens.matcher.find_candidate_spans` proposes spans
   without touching the stream.
2. Confirm: each span is looked up in the dictionary, strictly one at a time
   in scan order; confirmed spans get their compound token built and enriched.
3. Splice: the output is rebuilt once from the input and the confirmed spans.
   Tokens sitting between the verb and its particle are moved after the
   compound ("look it up" -> "look up", "it").

Repeat occurrences of the same compound lemma are then stamped with a
``frequency`` count.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from tqdm import tqdm

from .config import GroupingOptions
from .constants import FREQUENCY_MIN_COUNT, TAG_WORD
from .dictionary import DictionaryBackend, add_definition, add_rank
from .matcher import CandidateSpan, find_candidate_spans
from .tokens import Definition, Token, join_field

logger = logging.getLogger(__name__)

# Compound lemma -> output indices of its compound tokens
Occurrences = Dict[str, List[int]]


class CollaboratorError(RuntimeError):
    """Raised when the dictionary lookup or an enrichment step fails.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, *, phrase: str | None = None) -> None:
        super().__init__(message)
        self.phrase = phrase


@dataclass
class ConfirmedSpan:
    """A candidate span confirmed by the dictionary, with its compound token."""

    span: CandidateSpan
    compound: Token


def build_compound(tokens: Sequence[Token], span: CandidateSpan, *, with_offset: bool = True) -> Token:
    """Build the compound token replacing ``span``."""
    members = [tokens[i] for i in span.members]
    verb = members[0]
    compound = Token(
        value=join_field(members, "value"),
        normal=join_field(members, "normal"),
        lemma=join_field(members, "lemma"),
        pos=verb.pos,
        context_id=tokens[span.end].context_id,
        tokens=members,
        tag=TAG_WORD,
    )
    if with_offset:
        compound.start_offset = members[0].start_offset
        compound.end_offset = members[-1].end_offset
    return compound


async def _enrich(
    compound: Token,
    definition: Definition,
    dictionary: DictionaryBackend,
    options: GroupingOptions,
) -> Token:
    enriched = [compound]
    try:
        if options.with_definitions:
            # add_definition does not look up tokens that already have a definition
            enriched = [replace(compound, definition=definition)]
            enriched = await add_definition(
                enriched, dictionary, skip_pointers=options.skip_definition_pointers
            )
        if options.words_rank:
            enriched = await add_rank(enriched, options.words_rank)
    except Exception as exc:
        raise CollaboratorError(
            f"Enrichment failed for '{compound.lemma}': {exc}", phrase=compound.lemma
        ) from exc

    if len(enriched) != 1:
        raise CollaboratorError(
            f"Enrichment returned {len(enriched)} tokens for '{compound.lemma}', expected 1",
            phrase=compound.lemma,
        )
    return enriched[0]


async def confirm_span(
    tokens: Sequence[Token],
    span: CandidateSpan,
    dictionary: DictionaryBackend,
    options: GroupingOptions,
) -> ConfirmedSpan | None:
    """Look up one span; return it with its enriched compound if confirmed."""
    members = [tokens[i] for i in span.members]
    phrase = join_field(members, "lemma")
    pos = members[0].pos

    try:
        definition = await dictionary.lookup(phrase, pos=pos)
    except Exception as exc:
        raise CollaboratorError(f"Dictionary lookup failed for '{phrase}': {exc}", phrase=phrase) from exc

    if not definition:
        logger.debug(f"No definition for '{phrase}' ({pos}), keeping tokens as is")
        return None

    logger.debug(f"Confirmed phrasal verb '{phrase}' at {span.start}..{span.end}")
    compound = build_compound(tokens, span, with_offset=options.with_offset)
    compound = await _enrich(compound, definition, dictionary, options)
    return ConfirmedSpan(span=span, compound=compound)


async def confirm_spans(
    tokens: Sequence[Token],
    spans: Sequence[CandidateSpan],
    dictionary: DictionaryBackend,
    options: GroupingOptions,
    *,
    progress: bool = False,
) -> List[ConfirmedSpan]:
    """Confirm spans sequentially in scan order."""
    iterator: Iterable[CandidateSpan] = spans
    if progress:
        iterator = tqdm(spans, desc="Confirming phrasal verbs", unit="candidate")

    confirmed: List[ConfirmedSpan] = []
    for span in iterator:
        result = await confirm_span(tokens, span, dictionary, options)
        if result is not None:
            confirmed.append(result)
    return confirmed


def splice_tokens(
    tokens: Sequence[Token], confirmed: Sequence[ConfirmedSpan]
) -> Tuple[List[Token], Occurrences]:
    """Rebuild the stream with compounds in place of confirmed spans.

    Returns:
        The output tokens and, per compound lemma, the output indices of
        its compound tokens.

    Raises:
        ValueError: If spans overlap or are not in left-to-right order
    """
    output: List[Token] = []
    occurrences: Occurrences = defaultdict(list)
    position = 0

    for item in confirmed:
        span = item.span
        if span.start < position or span.end >= len(tokens):
            raise ValueError(f"span {span.start}..{span.end} overlaps or is out of range")

        output.extend(tokens[position : span.start])
        output.append(item.compound)
        occurrences[item.compound.lemma].append(len(output) - 1)
        # Objects between verb and particle go after the compound
        output.extend(tokens[i] for i in span.intervening)
        position = span.end + 1

    output.extend(tokens[position:])
    return output, dict(occurrences)


def add_phrasal_frequency(output: List[Token], occurrences: Occurrences) -> List[Token]:
    """Stamp ``frequency`` on compounds whose lemma occurs more than once."""
    for lemma, indices in occurrences.items():
        count = len(indices)
        if count < FREQUENCY_MIN_COUNT:
            continue
        for index in indices:
            output[index].frequency = count
    return output


async def group_phrasal_verbs(
    tokens: Iterable[Token],
    dictionary: DictionaryBackend,
    options: GroupingOptions | None = None,
    *,
    progress: bool = False,
) -> List[Token]:
    """Find phrasal verbs and group their tokens into compound tokens.

    Args:
        tokens: Tagged tokens (Penn tags, context ids)
        dictionary: Backend confirming candidates and providing definitions
        options: Grouping options (defaults to GroupingOptions())
        progress: Show a progress bar while confirming candidates

    Returns:
        The rewritten token list

    Raises:
        ValueError: If tokens or dictionary is None
        CollaboratorError: If the dictionary or an enrichment step fails;
            no partial result is returned
    """
    if tokens is None:
        raise ValueError("tokens must be provided")
    if dictionary is None:
        raise ValueError("dictionary must be provided")
    if options is None:
        options = GroupingOptions()

    tokens = list(tokens)
    spans = find_candidate_spans(tokens)
    confirmed = await confirm_spans(tokens, spans, dictionary, options, progress=progress)
    output, occurrences = splice_tokens(tokens, confirmed)
    if options.with_frequency:
        add_phrasal_frequency(output, occurrences)

    logger.info(
        f"Grouped {len(confirmed)} of {len(spans)} phrasal verb candidates "
        f"({len(tokens)} -> {len(output)} tokens, dictionary={dictionary.name})"
    )
    return output


def group_phrasal_verbs_sync(
    tokens: Iterable[Token],
    dictionary: DictionaryBackend,
    options: GroupingOptions | None = None,
    *,
    progress: bool = False,
) -> List[Token]:
    """Run :func:`group_phrasal_verbs` outside an event loop."""
    return asyncio.run(group_phrasal_verbs(tokens, dictionary, options, progress=progress))
