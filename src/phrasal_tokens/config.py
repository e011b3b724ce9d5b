"""Grouping options and their environment-variable overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from .constants import (
    ENV_SKIP_DEFINITION_POINTERS,
    ENV_WITH_DEFINITIONS,
    ENV_WITH_FREQUENCY,
    ENV_WITH_OFFSET,
    ENV_WORDS_RANK_TOP_N,
    FALSE_VALUES,
    SKIP_DEFINITION_POINTERS_DEFAULT,
    TRUE_VALUES,
    WITH_DEFINITIONS_DEFAULT,
    WITH_FREQUENCY_DEFAULT,
    WITH_OFFSET_DEFAULT,
)
from .dictionary import build_words_rank

logger = logging.getLogger(__name__)


@dataclass
class GroupingOptions:
    """Options of the phrasal verb grouping pass.

    Attributes:
        words_rank: Normalized word -> rank; when set, compound tokens get a rank
        with_definitions: Attach a definition to each compound token
        skip_definition_pointers: Leave out terms related through dictionary pointers
        with_offset: Copy start/end offsets onto compound tokens
        with_frequency: Stamp repeat-occurrence counts on compound tokens
    """

    words_rank: Mapping[str, int | float] | None = None
    with_definitions: bool = WITH_DEFINITIONS_DEFAULT
    skip_definition_pointers: bool = SKIP_DEFINITION_POINTERS_DEFAULT
    with_offset: bool = WITH_OFFSET_DEFAULT
    with_frequency: bool = WITH_FREQUENCY_DEFAULT


def parse_bool(value: str, *, name: str = "value") -> bool:
    """Parse a boolean environment value (1/0, true/false, yes/no, on/off)."""
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return parse_bool(raw, name=name)


def load_options_from_env() -> GroupingOptions:
    """Build GroupingOptions from environment variables (and a .env file)."""

    load_dotenv()

    words_rank = None
    top_n_raw = os.getenv(ENV_WORDS_RANK_TOP_N)
    if top_n_raw and top_n_raw.strip():
        try:
            top_n = int(top_n_raw)
        except ValueError as exc:
            raise ValueError(f"{ENV_WORDS_RANK_TOP_N} must be an integer, got {top_n_raw!r}") from exc
        words_rank = build_words_rank(top_n)
        logger.info(f"Loaded rank table with {len(words_rank)} words")

    return GroupingOptions(
        words_rank=words_rank,
        with_definitions=_env_bool(ENV_WITH_DEFINITIONS, WITH_DEFINITIONS_DEFAULT),
        skip_definition_pointers=_env_bool(
            ENV_SKIP_DEFINITION_POINTERS, SKIP_DEFINITION_POINTERS_DEFAULT
        ),
        with_offset=_env_bool(ENV_WITH_OFFSET, WITH_OFFSET_DEFAULT),
        with_frequency=_env_bool(ENV_WITH_FREQUENCY, WITH_FREQUENCY_DEFAULT),
    )
