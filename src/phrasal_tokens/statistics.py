"""Phrasal verb frequency statistics over grouped token streams."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Sequence

import pandas as pd

from .constants import (
    BOOK_FREQ,
    ITEM_TYPE,
    ITEM_TYPE_PHRASAL_VERB,
    PHRASAL,
    PHRASAL_STATS_COLUMNS,
    SCORE,
)
from .tokens import Token


def calculate_phrasal_verb_stats(tokens: Sequence[Token]) -> pd.DataFrame:
    """Aggregate compound token frequencies."""

    if tokens is None:
        raise ValueError("tokens must be provided")

    counts: Counter[str] = Counter(token.lemma for token in tokens if token.is_compound)
    if not counts:
        return pd.DataFrame(columns=PHRASAL_STATS_COLUMNS)

    stats = pd.DataFrame(
        [{PHRASAL: phrasal, BOOK_FREQ: freq} for phrasal, freq in counts.items()]
    ).sort_values([BOOK_FREQ, PHRASAL], ascending=[False, True])
    stats[ITEM_TYPE] = ITEM_TYPE_PHRASAL_VERB
    return stats[PHRASAL_STATS_COLUMNS].reset_index(drop=True)


def rank_phrasal_verbs(phrasal_stats_df: pd.DataFrame) -> pd.DataFrame:
    """Rank phrasal verbs by frequency in the stream."""

    if phrasal_stats_df is None:
        raise ValueError("phrasal_stats_df must be provided")

    if phrasal_stats_df.empty:
        return pd.DataFrame(columns=PHRASAL_STATS_COLUMNS + [SCORE])

    if BOOK_FREQ not in phrasal_stats_df.columns:
        raise ValueError(f"phrasal_stats_df must contain '{BOOK_FREQ}'")

    df = phrasal_stats_df.copy()
    max_freq = df[BOOK_FREQ].max()
    df[SCORE] = df[BOOK_FREQ] / max_freq if max_freq else 0.0
    df = df.sort_values(SCORE, ascending=False, kind="stable").reset_index(drop=True)
    return df


def save_phrasal_stats(stats_df: pd.DataFrame, output_path: Path) -> None:
    """Persist statistics as parquet (``.parquet``) or CSV (anything else)."""

    if stats_df is None:
        raise ValueError("stats_df must not be None")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix == ".parquet":
        stats_df.to_parquet(output_path, index=False)
    else:
        stats_df.to_csv(output_path, index=False)
