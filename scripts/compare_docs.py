#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare a text file against one or more source files.")
    parser.add_argument("subject", type=Path, help="Text file to check")
    parser.add_argument("sources", type=Path, nargs="+", help="Text file(s) to compare against")
    parser.add_argument("--exclude-citations", action="store_true", help="Blank cited spans before scoring")
    parser.add_argument("--web", action="store_true", help="Also search the web (needs Google API settings)")
    parser.add_argument("--no-semantic", action="store_true", help="Skip paraphrase detection")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    return parser.parse_args(argv)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    from plagscope_core import (
        CheckOptions,
        ConfigurationError,
        InputError,
        SimilarityEngine,
        StoredDocument,
        analyze_document,
        load_settings,
    )
    from plagscope_core.errors import validate_input_text
    from plagscope_core.logging_config import setup_logging
    from plagscope_core.websearch import GoogleSearchProvider

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level)

    try:
        subject_text = validate_input_text(_read(args.subject), label=str(args.subject))
        source_texts = [_read(path) for path in args.sources]
    except (OSError, InputError) as exc:
        print(f"Cannot read input: {exc}", file=sys.stderr)
        return 2

    options = CheckOptions(
        exclude_citations=args.exclude_citations,
        include_web_search=args.web,
        include_semantic_analysis=not args.no_semantic,
    )
    engine = SimilarityEngine(settings, web_provider=GoogleSearchProvider.from_settings(settings) if args.web else None)

    if len(source_texts) == 1 and not args.web:
        result = engine.check(subject_text, source_texts[0], options)
        if args.json:
            print(result.model_dump_json(indent=2))
        else:
            print(f"Overall similarity: {result.overall_similarity:.2f}%")
            print(f"Matches: {result.statistics.total_matches} ({', '.join(result.statistics.algorithms_used) or 'none'})")
            print(f"Citations: {result.citation_analysis.total_citations}")
        return 0

    subject = StoredDocument(id=str(args.subject), name=args.subject.name, content=subject_text)
    sources = [
        StoredDocument(id=str(path), name=path.name, content=text)
        for path, text in zip(args.sources, source_texts)
    ]
    report = analyze_document(engine, subject, sources, options)
    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(f"Overall similarity: {report.overall_similarity:.2f}% across {len(sources)} source(s)")
        breakdown = report.source_breakdown
        print(f"Matches: {report.total_matches} (document={breakdown.document}, web={breakdown.web})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
