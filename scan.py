#!/usr/bin/env python3

import argparse
import io
import json
import logging
import sys
import time

import ahocorasick
import lark
from lark.exceptions import LarkError

from coinlex import CoinLexError, __version__
from coinlex.lexicon_parser import DEFAULT_LEXICON_PATH, LEXICON_VERSION, load_file
from coinlex.pipeline import NewsPipeline
from coinlex.records import parse_newsdata_response

# Ensure UTF-8 encoding for stdout
sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")


def show_scan_statistics(raw_hits: int, entities, pattern_count: int):
    """Display hit and resolution statistics."""
    sys.stderr.write("=== Scan Statistics ===\n")
    sys.stderr.write(f"Patterns compiled: {pattern_count}\n")
    sys.stderr.write(f"Raw hits: {raw_hits}\n")
    sys.stderr.write(f"Distinct coins: {len(entities)}\n")
    if entities:
        sys.stderr.write("\nHits by coin:\n")
        for resolved in entities:
            sys.stderr.write(
                f"  {resolved.entity}: {resolved.occurrences} (first at byte {resolved.offset})\n"
            )
    sys.stderr.write("=======================\n\n")


def scan_text(args, lexicon, logger):
    """Extract coins from a plain text file."""
    with open(args.input_file, "r", encoding="utf-8") as f:
        text = f.read()

    build_start = time.time()
    extractor = lexicon.build_extractor()
    if args.show_timing:
        sys.stderr.write(f"Build time: {time.time() - build_start:.3f}s\n")

    scan_start = time.time()
    hits = list(extractor.scan(text))
    entities = None
    if args.show_stats or not args.no_resolve:
        entities = extractor.resolver.resolve(hits)
    if args.show_timing:
        sys.stderr.write(f"Scan time: {time.time() - scan_start:.3f}s\n")
    if entities is None:
        logger.info("Found %s raw hits", len(hits))
    else:
        logger.info("Found %s raw hits, %s coins", len(hits), len(entities))

    if args.show_stats:
        show_scan_statistics(len(hits), entities, len(extractor.table))

    if args.no_resolve:
        return [
            {
                "offset": hit.start,
                "length": hit.length,
                "pattern": extractor.table.patterns[hit.pattern_index],
                "coin": extractor.table.entity_for(hit.pattern_index),
            }
            for hit in hits
        ]
    return [
        {"coin": r.entity, "offset": r.offset, "occurrences": r.occurrences}
        for r in entities
    ]


def scan_news(args, lexicon, logger):
    """Filter and enrich a newsdata.io JSON response."""
    with open(args.input_file, "r", encoding="utf-8") as f:
        payload = json.load(f)

    articles = parse_newsdata_response(payload)
    pipeline = NewsPipeline(lexicon.build_validator(), lexicon.build_extractor())
    records = pipeline.process(articles)
    sys.stderr.write(
        f"Kept {len(records)} of {len(articles)} articles\n"
    )
    logger.info("Pipeline produced %s records", len(records))
    return [record.to_dict() for record in records]


def main():
    parser = argparse.ArgumentParser(
        description="Extract coin mentions from text or a newsdata.io response."
    )
    parser.add_argument(
        "input_file", nargs="?", help="Path to input text (or JSON with --news)"
    )
    parser.add_argument(
        "--lexicon",
        default=str(DEFAULT_LEXICON_PATH),
        help="Path to lexicon file (default: packaged lexicon)",
    )
    parser.add_argument(
        "--news",
        action="store_true",
        help="Treat input as a newsdata.io response and emit enriched records",
    )
    parser.add_argument(
        "--check-language",
        metavar="TAG",
        default=None,
        help="Report whether TAG is an accepted language and exit",
    )
    parser.add_argument(
        "--pretty-print",
        action="store_true",
        help="Emit all results in a single pretty-printed JSON array",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="Skip canonical resolution and emit raw pattern hits",
    )
    parser.add_argument(
        "--show-stats",
        action="store_true",
        help="Show hit and resolution statistics",
    )
    parser.add_argument(
        "--show-timing",
        action="store_true",
        help="Show build and scan timing",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )

    args = parser.parse_args()

    if args.version:
        print("Version information:")
        print(f"  pyahocorasick: {getattr(ahocorasick, '__version__', 'unknown')}")
        print(f"  lark: {lark.__version__}")
        print(f"  coinlex: {__version__}")
        print(f"  lexicon: {LEXICON_VERSION}")
        sys.exit(0)

    if not args.input_file and args.check_language is None:
        parser.error("the following arguments are required: input_file")

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )
    logger = logging.getLogger("coinlex")

    try:
        lexicon = load_file(args.lexicon)
        if args.check_language is not None:
            valid = lexicon.build_validator().is_valid(args.check_language)
            print(json.dumps({"language": args.check_language, "valid": valid}))
            sys.exit(0 if valid else 2)
        if args.news:
            output = scan_news(args, lexicon, logger)
        else:
            output = scan_text(args, lexicon, logger)
    except (CoinLexError, LarkError, OSError, json.JSONDecodeError) as e:
        logger.error("%s", e)
        sys.stderr.write(f"error: {e}\n")
        sys.exit(1)

    # Output results
    output_stream = None
    if args.output:
        output_stream = open(args.output, "w", encoding="utf-8", newline="\n")
    else:
        output_stream = sys.stdout

    try:
        if args.pretty_print:
            json.dump(output, output_stream, indent=2)
            output_stream.write("\n")
        else:
            for item in output:
                output_stream.write(json.dumps(item))
                output_stream.write("\n")
    finally:
        if args.output and output_stream is not sys.stdout:
            output_stream.close()


if __name__ == "__main__":
    main()
