"""Command-line interface for ReviewLens."""

import argparse
import json
import logging
import subprocess
import sys
from functools import partial
from pathlib import Path

from .core.aspect import load_taxonomy
from .core.config import settings
from .core.constants import FileConstants, UIConstants
from .core.errors import ReviewLensError
from .core.models import PipelineOptions
from .core.pipeline import build_reviews, run_analysis
from .core.sentiment import VADERSentimentScorer
from .core.signals import extract_signals
from .services.llm import LLMServiceFactory
from .utils.data_prep import export_to_json, load_corpus, simulate_large_corpus

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def _progress_printer():
    last = {"pct": -1}

    def report(pct):
        if pct != last["pct"]:
            last["pct"] = pct
            print(f"\rProgress: {pct:3d}%", end="", file=sys.stderr)
            if pct >= 100:
                print(file=sys.stderr)
    return report


def cmd_signals(args):
    """Signals command."""
    texts = load_corpus(args.input_file)
    options = PipelineOptions.from_settings()
    scorer = VADERSentimentScorer.from_options(options)
    stats = extract_signals(
        build_reviews(texts),
        args.limit,
        min_count=options.min_count,
        pmi_threshold=options.pmi_threshold,
        polarity_words=scorer.polarity_words,
    )

    print(f"Top {len(stats)} signals from {len(texts)} reviews:")
    for i, stat in enumerate(stats, 1):
        print(f"  {i:3d}. {stat.token:<30} score={stat.score:8.2f} count={stat.count:5d} df={stat.document_frequency}")


def cmd_analyze(args):
    """Analyze command."""
    texts = load_corpus(args.input_file)
    overrides = {}
    if args.batch_size:
        overrides["batch_size"] = args.batch_size
    if args.limit:
        overrides["signal_limit"] = args.limit
    options = PipelineOptions.from_settings(**overrides)

    print(f"Analyzing {len(texts)} reviews from {args.input_file}...")

    if args.taxonomy:
        taxonomy = load_taxonomy(args.taxonomy)
        result = run_analysis(texts, taxonomy=taxonomy, options=options,
                              on_progress=_progress_printer(), taxonomy_source="file")
    else:
        llm_service = LLMServiceFactory.create()
        discover = partial(llm_service.discover_taxonomy, review_count=len(texts))
        result = run_analysis(texts, discover=discover, options=options,
                              on_progress=_progress_printer(), taxonomy_source=llm_service.taxonomy_source,
                              seed=args.seed)

    if args.out:
        export_to_json(result, args.out)
        print(f"Results exported to {args.out}")

    print(f"\nAnalysis Summary ({result.processed_count} reviews, taxonomy: {result.taxonomy_source}):")
    print(f"Matched reviews: {len(result.reviews)}")
    print(f"Mentions found: {result.total_segments}")
    print(f"Net sentiment: {result.overall_net_sentiment:+.2f}")

    if result.aspects:
        print("\nAspects:")
        for stats in result.aspects:
            print(f"  {stats.name:<28} {stats.count:6d} segs  "
                  f"+{stats.positive}/-{stats.negative}/={stats.neutral}  "
                  f"net={stats.net_sentiment:+.2f}  confidence={stats.confidence:.2f}")

    for warning in result.warnings:
        print(f"WARNING: {warning}")


def cmd_export(args):
    """Export command."""
    try:
        with open(args.input_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if args.pretty:
            # Pretty print the JSON
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            output_file = args.output or args.input_file.replace('.json', '_export.json')
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            print(f"Exported to {output_file}")

    except FileNotFoundError:
        print(f"Input file {args.input_file} not found")
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in input file: {e}")


def cmd_simulate(args):
    """Simulate command."""
    samples = load_corpus(args.input_file)
    corpus = simulate_large_corpus(samples, args.count)
    with open(args.output, 'w', encoding='utf-8') as f:
        f.write("\n".join(corpus) + "\n")
    print(f"Wrote {len(corpus)} simulated reviews to {args.output}")


def cmd_ui(args):
    """UI command."""
    app_path = Path(__file__).parent / "ui" / "streamlit_app.py"

    if not app_path.exists():
        print(f"Streamlit app not found at {app_path}")
        return

    print("Launching ReviewLens UI...")
    try:
        subprocess.run([
            sys.executable, "-m", "streamlit", "run", str(app_path)
        ], check=True)
    except subprocess.CalledProcessError as e:
        print(f"Failed to launch UI: {e}")
    except KeyboardInterrupt:
        print("\nUI stopped by user")


def build_parser():
    parser = argparse.ArgumentParser(description="ReviewLens - Aspect-Based Sentiment Analysis for reviews")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Signals command
    signals_parser = subparsers.add_parser('signals', help='Show ranked vocabulary signals')
    signals_parser.add_argument('input_file', help='Corpus file (.txt, .csv or .json)')
    signals_parser.add_argument('--limit', type=int, default=settings.signal_limit, help='Number of signals to show')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Analyze a review corpus')
    analyze_parser.add_argument('input_file', help='Corpus file (.txt, .csv or .json)')
    analyze_parser.add_argument('--taxonomy', help='YAML taxonomy file (skips LLM discovery)')
    analyze_parser.add_argument('--out', help='Output JSON file')
    analyze_parser.add_argument('--batch-size', type=int, help='Reviews between progress updates')
    analyze_parser.add_argument('--limit', type=int, help='Number of signals sent to taxonomy discovery')
    analyze_parser.add_argument('--seed', type=int, help='Seed for the review sample shown to the LLM')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export analysis results')
    export_parser.add_argument('--in', dest='input_file', required=True, help='Input JSON file')
    export_parser.add_argument('--out', dest='output', help='Output file (optional)')
    export_parser.add_argument('--pretty', action='store_true', help='Pretty print to stdout')

    # Simulate command
    simulate_parser = subparsers.add_parser('simulate', help='Generate a large synthetic corpus from samples')
    simulate_parser.add_argument('input_file', help='Sample reviews file')
    simulate_parser.add_argument('--count', type=int, default=UIConstants.SIMULATED_REVIEW_COUNT, help='Number of reviews')
    simulate_parser.add_argument('--out', dest='output', required=True, help='Output text file')

    # UI command
    subparsers.add_parser('ui', help='Launch web UI')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    commands = {
        'signals': cmd_signals,
        'analyze': cmd_analyze,
        'export': cmd_export,
        'simulate': cmd_simulate,
        'ui': cmd_ui,
    }
    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except ReviewLensError as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
