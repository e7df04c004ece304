"""Corpus loading, sample data and result export."""

import csv
import datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .. import __version__
from ..core.constants import UIConstants
from ..core.errors import InputError
from ..core.models import AnalysisResult

logger = logging.getLogger(__name__)

SAMPLE_DATASETS: Dict[str, List[str]] = {
    "Food (Cereal)": [
        "The flavor is absolutely delicious, very chocolatey but not too sweet. However, the packaging was crushed when it arrived.",
        "I love the texture, it's so crunchy and stays fresh in milk. Price is a bit high for the size though.",
        "Disappointed with the ingredients list, too much sugar. The taste is okay, but I expected healthier.",
        "Great value for money! The box is huge. It tastes a bit bland compared to other brands.",
        "Perfect crunch! My kids love the taste. The resealable bag is a game changer.",
        "Smells weird when you open the box. Texture becomes soggy instantly. Not buying again.",
    ],
    "Electronics (Headphones)": [
        "Battery life is great but the charging case feels cheap.",
        "Sound quality is excellent, deep bass and clear vocals. Bluetooth pairing took forever though.",
        "The noise cancelling works well on flights. However, the ear cushions get hot after an hour.",
        "Customer service replaced my broken pair quickly. Very happy with the support.",
        "Connection drops constantly and the microphone sounds muffled on calls.",
        "Good value for the price, although the build quality is mostly plastic.",
    ],
}

_SIMULATED_PREFIXES = ["Really", "Honestly", "I think", "Actually", "To be honest"]
_SIMULATED_ENDINGS = [".", "!", "!!", "..."]


def simulate_large_corpus(samples: Sequence[str], count: int = UIConstants.SIMULATED_REVIEW_COUNT) -> List[str]:
    """Permute sample reviews into a large synthetic corpus for load testing.

    Each line gets a prefix, an ending and a serial number so lines are not
    byte-identical; the vocabulary stays that of the samples.
    """
    if not samples:
        return []
    corpus = []
    for i in range(count):
        base = samples[i % len(samples)].strip().rstrip(".!?")
        prefix = _SIMULATED_PREFIXES[i % len(_SIMULATED_PREFIXES)]
        ending = _SIMULATED_ENDINGS[i % len(_SIMULATED_ENDINGS)]
        corpus.append(f"{prefix}, {base[:1].lower()}{base[1:]}{ending} #{i}")
    return corpus


def load_corpus(path: Union[str, Path], text_field: str = "text") -> List[str]:
    """Read raw review texts from a .txt (one per line), .csv or .json file."""
    path = Path(path)
    if not path.exists():
        raise InputError(f"Input file {path} not found")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            with open(path, "r", encoding="utf-8", newline="") as f:
                reader = csv.DictReader(f)
                if not reader.fieldnames or text_field not in reader.fieldnames:
                    raise InputError(f"CSV file {path} has no '{text_field}' column")
                texts = [row.get(text_field) or "" for row in reader]
        elif suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                data = data.get("reviews", [])
            if not isinstance(data, list):
                raise InputError(f"JSON file {path} must hold a list of reviews")
            texts = [item.get(text_field, "") if isinstance(item, dict) else str(item) for item in data]
        else:
            with open(path, "r", encoding="utf-8") as f:
                texts = f.read().splitlines()
    except UnicodeDecodeError as e:
        raise InputError(f"Input file {path} is not UTF-8 text: {e}")
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in input file {path}: {e}")

    texts = [t for t in texts if t and t.strip()]
    logger.info(f"Loaded {len(texts)} reviews from {path}")
    return texts


def prepare_export(result: AnalysisResult) -> Dict[str, Any]:
    """Prepare an AnalysisResult for JSON export."""
    return {
        "summary": {
            "processed_count": result.processed_count,
            "matched_reviews": len(result.reviews),
            "total_segments": result.total_segments,
            "net_sentiment": round(result.overall_net_sentiment, 4),
            "taxonomy_source": result.taxonomy_source,
        },
        "warnings": list(result.warnings),
        "taxonomy": [a.to_dict() for a in result.taxonomy],
        "aspects": [
            {
                "name": s.name,
                "description": s.description,
                "count": s.count,
                "reviewCount": s.review_count,
                "positive": s.positive,
                "negative": s.negative,
                "neutral": s.neutral,
                "net_sentiment": round(s.net_sentiment, 4),
                "confidence": round(s.confidence, 4),
                "keywords": list(s.keywords),
                "trigger_counts": dict(s.trigger_counts),
            }
            for s in result.aspects
        ],
        "topWords": [
            {
                "token": w.token,
                "count": w.count,
                "score": round(w.score, 4),
                "document_frequency": w.document_frequency,
                "kind": w.kind,
            }
            for w in result.top_words
        ],
        "reviews": [
            {
                "review_id": r.review_id,
                "original_text": r.original_text,
                "segments": [s.to_dict() for s in r.segments],
            }
            for r in result.reviews
        ],
        "metadata": {
            "export_timestamp": None,  # Will be set by export_to_json
            "version": __version__,
        },
    }


def export_to_json(data: Union[AnalysisResult, Dict[str, Any]], filename: Union[str, Path]) -> None:
    """Export a result (or an already prepared payload) to a JSON file."""
    if isinstance(data, AnalysisResult):
        data = prepare_export(data)

    data.setdefault("metadata", {})["export_timestamp"] = datetime.datetime.now().isoformat()

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
