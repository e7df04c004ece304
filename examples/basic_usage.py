"""Basic usage examples for ReviewLens."""

from functools import partial
from pathlib import Path

from reviewlens import LLMServiceFactory, run_analysis
from reviewlens.core.aspect import load_taxonomy
from reviewlens.core.pipeline import build_reviews
from reviewlens.core.signals import extract_signals
from reviewlens.utils.data_prep import SAMPLE_DATASETS, simulate_large_corpus


def example_signals():
    """Example: inspect the vocabulary signals of a corpus."""
    print("🔍 Vocabulary signals for the simulated cereal corpus")
    corpus = simulate_large_corpus(SAMPLE_DATASETS["Food (Cereal)"], 600)
    for stat in extract_signals(build_reviews(corpus), limit=10):
        print(f"  {stat.token:<25} {stat.score:8.1f} ({stat.kind}, {stat.count} occurrences)")


def example_with_taxonomy_file():
    """Example: analysis with a hand-written taxonomy."""
    print("\n📋 Analysis with examples/taxonomy_food.yaml")
    taxonomy = load_taxonomy(Path(__file__).parent / "taxonomy_food.yaml")
    result = run_analysis(SAMPLE_DATASETS["Food (Cereal)"], taxonomy=taxonomy, taxonomy_source="file")
    for stats in result.aspects:
        print(f"  {stats.name}: {stats.count} segments, net {stats.net_sentiment:+.2f}, "
              f"confidence {stats.confidence:.2f}")


def example_with_discovery():
    """Example: let the LLM (or the predefined fallback) name the aspects."""
    print("\n🤖 Analysis with taxonomy discovery")
    llm_service = LLMServiceFactory.create()
    reviews = SAMPLE_DATASETS["Electronics (Headphones)"]
    result = run_analysis(
        reviews,
        discover=partial(llm_service.discover_taxonomy, review_count=len(reviews)),
        taxonomy_source=llm_service.taxonomy_source,
        on_progress=lambda pct: print(f"  progress {pct}%"),
    )
    print(f"  taxonomy source: {result.taxonomy_source}, {len(result.aspects)} aspects")
    for review in result.reviews:
        for segment in review.segments:
            print(f"  [{review.review_id}] {segment.aspect_category} ({segment.sentiment.value}): "
                  f"{segment.segment_text}")


if __name__ == "__main__":
    example_signals()
    example_with_taxonomy_file()
    example_with_discovery()
