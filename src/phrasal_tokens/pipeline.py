"""Grouping stage orchestration and command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List

from .config import GroupingOptions, load_options_from_env
from .constants import DEFAULT_MODEL_NAME, ENCODING_UTF8, LOG_FORMAT
from .dictionary import DictionaryBackend, MappingDictionary, WordNetDictionary, build_words_rank
from .grouping import group_phrasal_verbs
from .statistics import calculate_phrasal_verb_stats, rank_phrasal_verbs, save_phrasal_stats
from .text_processing import initialize_spacy_model, tokenize_text
from .tokens import Token, load_tokens_json, save_tokens_json

logger = logging.getLogger(__name__)


def setup_logging(log_file: str | None = None, *, verbose: bool = False) -> None:
    """Configure logging to output to both terminal and file (if specified)."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


async def process_text(
    text: str,
    dictionary: DictionaryBackend,
    options: GroupingOptions | None = None,
    *,
    model_name: str = DEFAULT_MODEL_NAME,
    progress: bool = False,
) -> List[Token]:
    """Tag raw text with spaCy and group its phrasal verbs."""

    if text is None:
        raise ValueError("text must not be None")
    if options is None:
        options = GroupingOptions()

    nlp = initialize_spacy_model(model_name)
    tokens = tokenize_text(text, nlp, with_offset=options.with_offset)
    logger.info(f"Tagged {len(tokens)} tokens with {model_name}")
    return await group_phrasal_verbs(tokens, dictionary, options, progress=progress)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Group phrasal verbs in a tagged token stream into compound tokens"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", type=Path, help="Plain text file to tag with spaCy")
    source.add_argument("--tokens", type=Path, help="JSON array of tagged tokens")
    parser.add_argument("--output", type=Path, required=True, help="Output JSON path")
    parser.add_argument(
        "--stats", type=Path, default=None, help="Write phrasal verb stats (.csv or .parquet)"
    )
    parser.add_argument(
        "--model-name", type=str, default=DEFAULT_MODEL_NAME, help="spaCy model for --text"
    )
    parser.add_argument(
        "--glossary",
        type=Path,
        default=None,
        help="CSV with phrase,definition columns. Defaults to WordNet.",
    )
    parser.add_argument("--no-definitions", action="store_true", help="Do not attach definitions")
    parser.add_argument(
        "--with-pointers",
        action="store_true",
        help="Attach terms related through dictionary pointers to definitions",
    )
    parser.add_argument("--no-offset", action="store_true", help="Do not copy offsets")
    parser.add_argument("--no-frequency", action="store_true", help="Do not count repeats")
    parser.add_argument(
        "--rank-top-n",
        type=int,
        default=None,
        help="Rank compound tokens against the N most frequent words (wordfreq)",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--log-file", type=str, default=None, help="Also log to this file")
    parser.add_argument("--verbose", action="store_true", help="Log per-candidate decisions")
    return parser


def _options_from_args(args: argparse.Namespace) -> GroupingOptions:
    options = load_options_from_env()
    if args.no_definitions:
        options = replace(options, with_definitions=False)
    if args.with_pointers:
        options = replace(options, skip_definition_pointers=False)
    if args.no_offset:
        options = replace(options, with_offset=False)
    if args.no_frequency:
        options = replace(options, with_frequency=False)
    if args.rank_top_n is not None:
        options = replace(options, words_rank=build_words_rank(args.rank_top_n))
    return options


def run_grouping_cli(argv: List[str] | None = None) -> None:
    """CLI entry point: tokens/text -> grouped tokens JSON (+ optional stats)."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, verbose=args.verbose)

    options = _options_from_args(args)
    dictionary: DictionaryBackend
    if args.glossary is not None:
        dictionary = MappingDictionary.from_csv(args.glossary)
        logger.info(f"Loaded glossary with {len(dictionary)} phrases from {args.glossary}")
    else:
        dictionary = WordNetDictionary()

    if args.text is not None:
        if not args.text.exists():
            raise FileNotFoundError(args.text)
        text = args.text.read_text(encoding=ENCODING_UTF8)
        grouped = asyncio.run(
            process_text(
                text, dictionary, options, model_name=args.model_name, progress=args.progress
            )
        )
    else:
        tokens = load_tokens_json(args.tokens)
        grouped = asyncio.run(
            group_phrasal_verbs(tokens, dictionary, options, progress=args.progress)
        )

    save_tokens_json(grouped, args.output)
    print(f"Wrote {len(grouped)} tokens to {args.output}")

    if args.stats is not None:
        stats_df = rank_phrasal_verbs(calculate_phrasal_verb_stats(grouped))
        save_phrasal_stats(stats_df, args.stats)
        print(f"Wrote {len(stats_df)} phrasal verbs to {args.stats}")


if __name__ == "__main__":
    run_grouping_cli()
