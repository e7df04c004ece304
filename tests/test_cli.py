"""Tests for CLI functionality."""

import json
from unittest.mock import patch

import pytest
from reviewlens.cli import build_parser, main

REVIEWS = [
    "Battery life is great but the box was crushed.",
    "Battery life lasts all day.",
    "Battery life could be longer, the box was fine.",
]


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "reviews.txt"
    path.write_text("\n".join(REVIEWS) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def taxonomy_file(tmp_path):
    path = tmp_path / "taxonomy.yaml"
    path.write_text("Battery: [battery life]\nPackaging: [box]\n", encoding="utf-8")
    return path


def test_parser_commands():
    parser = build_parser()
    args = parser.parse_args(["analyze", "reviews.txt", "--taxonomy", "t.yaml", "--batch-size", "10"])
    assert args.command == "analyze"
    assert args.batch_size == 10
    assert parser.parse_args(["simulate", "in.txt", "--out", "out.txt"]).count == 5000


def test_signals(corpus_file, capsys):
    main(["signals", str(corpus_file), "--limit", "5"])
    out = capsys.readouterr().out
    assert "from 3 reviews" in out
    assert "battery life" in out


def test_analyze_with_taxonomy(corpus_file, taxonomy_file, tmp_path, capsys):
    out_file = tmp_path / "result.json"
    main(["analyze", str(corpus_file), "--taxonomy", str(taxonomy_file), "--out", str(out_file)])

    out = capsys.readouterr().out
    assert "taxonomy: file" in out
    assert "Battery" in out
    data = json.loads(out_file.read_text(encoding="utf-8"))
    assert data["summary"]["processed_count"] == 3
    battery = next(a for a in data["aspects"] if a["name"] == "Battery")
    assert battery["count"] == 3


@patch("reviewlens.cli.LLMServiceFactory")
def test_analyze_with_discovery(mock_factory, corpus_file, capsys):
    service = mock_factory.create.return_value
    service.taxonomy_source = "predefined"
    service.discover_taxonomy.return_value = [{"name": "Packaging", "keywords": ["box"]}]

    main(["analyze", str(corpus_file), "--seed", "1"])

    out = capsys.readouterr().out
    assert "taxonomy: predefined" in out
    assert "Packaging" in out
    service.discover_taxonomy.assert_called_once()
    _, kwargs = service.discover_taxonomy.call_args
    assert kwargs["review_count"] == 3


def test_analyze_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["analyze", str(tmp_path / "missing.txt")])
    assert exc_info.value.code == 1


def test_simulate(corpus_file, tmp_path, capsys):
    out_file = tmp_path / "simulated.txt"
    main(["simulate", str(corpus_file), "--count", "30", "--out", str(out_file)])
    lines = out_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 30
    assert "Wrote 30 simulated reviews" in capsys.readouterr().out


def test_export_pretty(tmp_path, capsys):
    in_file = tmp_path / "result.json"
    in_file.write_text(json.dumps({"summary": {"processed_count": 3}}), encoding="utf-8")
    main(["export", "--in", str(in_file), "--pretty"])
    assert '"processed_count": 3' in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    main([])
    assert "usage" in capsys.readouterr().out.lower()


if __name__ == "__main__":
    pytest.main([__file__])
