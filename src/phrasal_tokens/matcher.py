"""Phrasal verb candidate matching.

A single left-to-right scan tracks the most recent unresolved verb and closes
a candidate window when a particle or preposition appears:

1. VERB + ADV (RP), unless a preposition follows ("look it up")
2. VERB + PREP (IN)
3. VERB + ADV + PREP ("put up with")

Tokens between the verb and the trigger do not cancel the pending verb, which
is what lets separable phrasal verbs be found. A compound that is already a
grouped phrasal verb clears the pending verb and never opens a window itself.
The scan only proposes spans;
confirmation against a dictionary happens in :mod:`phrasal_tokens.grouping`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .constants import POS_PARTICLE, POS_PREPOSITION, POS_VERB_PREFIX
from .tokens import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No verb is pending."""


@dataclass(frozen=True)
class VerbPending:
    """A verb was seen at ``verb_index`` and the scan waits for a trigger."""

    verb_index: int


MatcherState = Union[Idle, VerbPending]

IDLE = Idle()


@dataclass(frozen=True)
class CandidateSpan:
    """Candidate phrasal verb found by the scan.

    Attributes:
        start: Input index of the verb
        end: Input index of the triggering particle/preposition
        members: Input indices of the phrase tokens after context filtering,
                 left to right; always starts with ``start``
    """

    start: int
    end: int
    members: Tuple[int, ...]

    @property
    def intervening(self) -> Tuple[int, ...]:
        """Indices inside the span that are not part of the phrase (objects)."""
        members = set(self.members)
        return tuple(i for i in range(self.start, self.end + 1) if i not in members)


def is_phrasal_compound(token: Token) -> bool:
    """True for compounds built by phrasal grouping (a particle or preposition inside)."""
    return token.is_compound and any(
        part.pos in (POS_PARTICLE, POS_PREPOSITION) for part in token.tokens
    )


def is_verb(token: Token) -> bool:
    # Already grouped phrasal verbs never open a new window
    if is_phrasal_compound(token):
        return False
    return isinstance(token.pos, str) and token.pos.startswith(POS_VERB_PREFIX)


def _closing_indices(tokens: Sequence[Token], verb_index: int, index: int) -> List[int] | None:
    """Return raw candidate indices if ``index`` closes the window, else None."""
    token = tokens[index]
    next_token = tokens[index + 1] if index + 1 < len(tokens) else None

    if token.pos == POS_PARTICLE and (next_token is None or next_token.pos != POS_PREPOSITION):
        return [verb_index, index]

    if token.pos == POS_PREPOSITION:
        indices = [verb_index]
        if index > 0 and tokens[index - 1].pos == POS_PARTICLE:
            indices.append(index - 1)
        indices.append(index)
        return indices

    return None


def filter_by_context(tokens: Sequence[Token], indices: Sequence[int]) -> List[int]:
    """Keep only indices whose token shares the verb's (first index) context."""
    if not indices:
        return []
    context_id = tokens[indices[0]].context_id
    return [i for i in indices if tokens[i].context_id == context_id]


def step(
    state: MatcherState, tokens: Sequence[Token], index: int
) -> Tuple[MatcherState, CandidateSpan | None]:
    """Advance the matcher over ``tokens[index]``.

    Returns:
        The next state and the candidate span closed at this position, if any.
        Any closing trigger returns the matcher to ``Idle``, including
        candidates abandoned by the context filter.
    """
    token = tokens[index]
    if is_phrasal_compound(token):
        # A verb before a grouped phrase cannot pair with particles after it
        return IDLE, None
    if is_verb(token):
        state = VerbPending(index)

    if not isinstance(state, VerbPending):
        return state, None

    indices = _closing_indices(tokens, state.verb_index, index)
    if indices is None:
        return state, None

    members = filter_by_context(tokens, indices)
    if len(members) < 2:
        logger.debug(f"Candidate at {state.verb_index}..{index} crosses contexts, skipping")
        return IDLE, None

    return IDLE, CandidateSpan(start=state.verb_index, end=index, members=tuple(members))


def find_candidate_spans(tokens: Sequence[Token]) -> List[CandidateSpan]:
    """Scan tokens once and return candidate spans in left-to-right order."""

    if tokens is None:
        raise ValueError("tokens must not be None")

    spans: List[CandidateSpan] = []
    state: MatcherState = IDLE
    for index in range(len(tokens)):
        state, span = step(state, tokens, index)
        if span is not None:
            spans.append(span)
    return spans
