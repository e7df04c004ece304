"""Utility modules for ReviewLens."""

from .data_prep import export_to_json, prepare_export, load_corpus, simulate_large_corpus, SAMPLE_DATASETS

__all__ = [
    "export_to_json",
    "prepare_export",
    "load_corpus",
    "simulate_large_corpus",
    "SAMPLE_DATASETS",
]
