import pytest

from adapters.riddle_loader import load_riddles
from core.errors import InvalidMapError

from conftest import write_json


def test_load_riddles(riddles_file):
    riddles = load_riddles(riddles_file)
    assert [r.question for r in riddles] == ["Q1", "Q2"]
    assert riddles[1].options == ["c", "d"]
    assert riddles[1].correct_index == 1


def test_missing_file_returns_empty(tmp_path):
    assert load_riddles(tmp_path / "nope.json") == []


def test_malformed_file_raises(tmp_path):
    with pytest.raises(InvalidMapError):
        load_riddles(write_json(tmp_path / "bad.json", "[[["))


def test_empty_list(tmp_path):
    assert load_riddles(write_json(tmp_path / "e.json", {"enigmas": []})) == []
    assert load_riddles(write_json(tmp_path / "n.json", {"outra": 1})) == []


def test_invalid_entries_are_skipped(tmp_path):
    data = {
        "enigmas": [
            {"opcoes": ["a"], "correta": 0},
            {"pergunta": "No answer", "opcoes": ["a"]},
            {"pergunta": "Text answer", "opcoes": ["a"], "correta": "zero"},
            {"pergunta": "No options", "opcoes": [], "correta": 0},
            {"pergunta": "Out of range", "opcoes": ["a", "b"], "correta": 2},
            {"pergunta": "Negative", "opcoes": ["a", "b"], "correta": -1},
            "just text",
            {"pergunta": "Good", "opcoes": ["x", None, "y"], "correta": 1},
        ]
    }
    riddles = load_riddles(write_json(tmp_path / "r.json", data))
    assert [r.question for r in riddles] == ["Good"]
    assert riddles[0].options == ["x", "y"]
