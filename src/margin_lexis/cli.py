"""Command-line entry point: lexicon export, landscape summary and definitions."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from margin_lexis.bands import banded_to_dataframe
from margin_lexis.constants import VIEW_REALITY, VIEWS, ZONES, get_lexicon_export_path, get_stats_path
from margin_lexis.constants.llm_config import DEFAULT_CACHE_DIR, DEFAULT_PROVIDER, PROVIDER_ENV_VAR
from margin_lexis.definitions import DefinitionFetcher
from margin_lexis.engine import LexisEngine
from margin_lexis.landscape import discovery_rate, plot_to_dataframe
from margin_lexis.llm.base import DEFAULT_MODELS, get_provider
from margin_lexis.llm.definition_cache import CachedDefinitionProvider, DefinitionCache
from margin_lexis.readers.text_reader import load_corpus
from margin_lexis.storage import open_stat_store

logger = logging.getLogger(__name__)


def _stats_source(args: argparse.Namespace) -> str | Path | None:
    if args.stats:
        return args.stats
    if args.project:
        return get_stats_path(args.project)
    return None


def _build_engine(args: argparse.Namespace) -> LexisEngine:
    corpus = load_corpus(args.documents)
    stats_source = _stats_source(args)
    engine = LexisEngine(open_stat_store(stats_source), corpus)
    logger.info("Loaded %d documents, %d stored stats", len(corpus), len(engine.stats))
    return engine


def run_lexicon(args: argparse.Namespace) -> None:
    engine = _build_engine(args)
    df = banded_to_dataframe(engine.banded())
    output = args.output or (get_lexicon_export_path(args.project) if args.project else None)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        print(f"Lexicon written to {output} ({len(df)} lemmas)")
    else:
        print(df.head(args.top).to_string(index=False))


def run_landscape(args: argparse.Namespace) -> None:
    engine = _build_engine(args)
    plot = engine.project(args.view, args.progress)
    stats = engine.landscape_stats()

    print(f"View: {plot.view} at simulated progress {plot.simulated_progress:.0%}")
    print(f"Unique lemmas: {stats.unique_tokens}  Tokens: {stats.total_tokens}  TTR: {stats.ttr:.3f}")
    print(f"Difficulty: {stats.difficulty_score:.3f}  Discovery rate: {discovery_rate(plot):.0%}")
    for zone in ZONES:
        print(f"- {zone}: {len(plot.zones[zone])}")
    progress = engine.learning_progress()
    print("Familiarity: " + ", ".join(f"{name}={count}" for name, count in progress.items()))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        plot_to_dataframe(plot).to_csv(args.output, index=False)
        print(f"Plot points written to {args.output}")


def run_define(args: argparse.Namespace) -> None:
    engine = _build_engine(args)
    lemma = args.lemma.lower()

    existing = engine.stats.get(lemma)
    if existing and existing.definition:
        print(existing.definition)
        return

    provider = get_provider(args.provider, args.model)
    if not args.no_cache:
        provider = CachedDefinitionProvider(provider, DefinitionCache(DEFAULT_CACHE_DIR))
    fetcher = DefinitionFetcher(provider)

    definition = asyncio.run(fetcher.fetch(lemma))
    if definition is None:
        print(f"No definition available for {lemma!r}")
        return
    engine.set_definition(lemma, definition)
    print(definition)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="margin-lexis", description="Vocabulary mastery engine for a reading corpus"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "documents", type=Path, nargs="*", help="Plain text documents in reading order"
        )
        sub.add_argument(
            "--stats",
            type=str,
            default=None,
            help="Vocabulary stat file (JSON). Defaults to an in-memory store.",
        )
        sub.add_argument(
            "--project",
            type=str,
            default=None,
            help="Project name; stats and exports go under data/ unless overridden",
        )

    lexicon = subparsers.add_parser("lexicon", help="Aggregate and band the lexicon")
    add_common(lexicon)
    lexicon.add_argument("--output", type=Path, help="Write the banded lexicon to CSV")
    lexicon.add_argument("--top", type=int, default=30, help="Rows to print without --output")
    lexicon.set_defaults(func=run_lexicon)

    landscape = subparsers.add_parser("landscape", help="Project the lexicon landscape")
    add_common(landscape)
    landscape.add_argument("--view", choices=VIEWS, default=VIEW_REALITY)
    landscape.add_argument(
        "--progress", type=float, default=1.0, help="Simulated reading progress in [0, 1]"
    )
    landscape.add_argument("--output", type=Path, help="Write plot points to CSV")
    landscape.set_defaults(func=run_landscape)

    define = subparsers.add_parser("define", help="Fetch and cache a definition")
    define.add_argument("lemma", type=str)
    add_common(define)
    define.add_argument(
        "--provider",
        type=str,
        choices=sorted(DEFAULT_MODELS),
        default=os.getenv(PROVIDER_ENV_VAR, DEFAULT_PROVIDER),
        help=f"LLM provider (default: ${PROVIDER_ENV_VAR} or {DEFAULT_PROVIDER})",
    )
    define.add_argument("--model", type=str, default=None, help="Model override")
    define.add_argument("--no-cache", action="store_true", help="Bypass the response cache")
    define.set_defaults(func=run_define)

    return parser


def main(argv: List[str] | None = None) -> None:
    """CLI entry point."""

    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
