"""Tests for corpus loading, simulation and export."""

import json

import pytest
from reviewlens import __version__
from reviewlens.core.errors import InputError
from reviewlens.core.pipeline import run_analysis
from reviewlens.utils.data_prep import (
    SAMPLE_DATASETS,
    export_to_json,
    load_corpus,
    prepare_export,
    simulate_large_corpus,
)


class TestLoadCorpus:
    """Test load_corpus()."""

    def test_text_file(self, tmp_path):
        path = tmp_path / "reviews.txt"
        path.write_text("Great taste\n\n   \nCrushed box\n", encoding="utf-8")
        assert load_corpus(path) == ["Great taste", "Crushed box"]

    def test_csv_file(self, tmp_path):
        path = tmp_path / "reviews.csv"
        path.write_text('id,text\n1,"Great taste, fast shipping"\n2,\n3,Crushed box\n', encoding="utf-8")
        assert load_corpus(path) == ["Great taste, fast shipping", "Crushed box"]

    def test_csv_custom_column(self, tmp_path):
        path = tmp_path / "reviews.csv"
        path.write_text("body\nGreat taste\n", encoding="utf-8")
        assert load_corpus(path, text_field="body") == ["Great taste"]
        with pytest.raises(InputError):
            load_corpus(path)

    def test_json_file(self, tmp_path):
        path = tmp_path / "reviews.json"
        path.write_text(json.dumps({"reviews": [{"text": "Great taste"}, "Crushed box", {"text": ""}]}),
                        encoding="utf-8")
        assert load_corpus(path) == ["Great taste", "Crushed box"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "reviews.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InputError):
            load_corpus(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            load_corpus(tmp_path / "missing.txt")


def test_simulate_large_corpus():
    samples = SAMPLE_DATASETS["Food (Cereal)"]
    corpus = simulate_large_corpus(samples, 100)
    assert len(corpus) == 100
    assert len(set(corpus)) == 100
    assert corpus[0].startswith("Really, the flavor is absolutely delicious")
    assert simulate_large_corpus([], 10) == []


def test_simulated_corpus_analysis():
    corpus = simulate_large_corpus(SAMPLE_DATASETS["Food (Cereal)"], 600)
    result = run_analysis(corpus, taxonomy=[{"name": "Packaging", "keywords": ["box", "packaging"]}])
    assert result.processed_count == 600
    assert result.get_aspect("Packaging").review_count == 300
    assert not any(w.startswith("High duplication") for w in result.warnings)


class TestExport:
    """Test JSON export."""

    def setup_method(self):
        self.result = run_analysis(
            ["Battery life is great but the box was crushed."],
            taxonomy=[{"name": "Battery", "keywords": ["battery life"]}, {"name": "Packaging", "keywords": ["box"]}],
        )

    def test_prepare_export(self):
        data = prepare_export(self.result)
        assert data["summary"]["processed_count"] == 1
        assert data["summary"]["total_segments"] == 2
        assert data["summary"]["taxonomy_source"] == "provided"
        assert {a["name"] for a in data["aspects"]} == {"Battery", "Packaging"}
        assert data["aspects"][0]["reviewCount"] == 1
        assert data["reviews"][0]["segments"][0]["trigger_word"] == "battery life"
        assert data["reviews"][0]["segments"][0]["sentiment"] == "Positive"
        assert data["metadata"]["version"] == __version__
        json.dumps(data)

    def test_export_to_json(self, tmp_path):
        path = tmp_path / "out.json"
        export_to_json(self.result, path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"]["export_timestamp"]
        assert len(data["taxonomy"]) == 2


if __name__ == "__main__":
    pytest.main([__file__])
