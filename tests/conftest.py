"""
Shared pytest configuration and fixtures for the test suite.

Provides a scripted GameIO, a deterministic random source, small mazes and
temporary map/riddle files.
"""

import json
import os
import random
from pathlib import Path

import pytest

from core.config import AppSettings
from core.domain.models import Riddle
from core.domain.rooms import Center, Entrance, LeverRoom, RiddleRoom, StandardRoom
from core.maze import Maze

# Bots must not pause between turns during the CLI tests
os.environ.setdefault("GLORY_MAZE_BOT_MOVE_DELAY_SECONDS", "0")


class ScriptedIO:
    """GameIO that replays canned answers and records everything shown."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.shown = []
        self.prompts = []

    def show(self, message):
        self.shown.append(message)

    def ask(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            return None
        return self.answers.pop(0)

    @property
    def output(self):
        return "\n".join(self.shown)


class StubRandom(random.Random):
    """Random whose `random()` and `randrange()` return scripted values.

    When a script runs out, `random()` returns 0.0 and `randrange()` returns
    the lowest value of the range.
    """

    def __init__(self, floats=(), indexes=()):
        super().__init__(0)
        self.floats = list(floats)
        self.indexes = list(indexes)

    def random(self):
        return self.floats.pop(0) if self.floats else 0.0

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start, stop = 0, start
        value = self.indexes.pop(0) if self.indexes else 0
        return start + value

    def choice(self, seq):
        return seq[self.randrange(len(seq))]

    def shuffle(self, x):
        return None


@pytest.fixture
def scripted_io():
    return ScriptedIO()


@pytest.fixture
def riddle():
    return Riddle(question="2 + 2?", options=["3", "4", "5"], correct_index=1)


@pytest.fixture
def small_maze(riddle):
    """Entrada - Hall - (Library riddle) - Treasure, plus a costly Hall - Treasure corridor.

    Cheapest route: Entrada -> Hall -> Library -> Treasure (cost 3).
    """

    maze = Maze("Test Maze")
    maze.add_room(Entrance("Entrada", "Front gate"))
    maze.add_room(StandardRoom("Hall", "Empty hall"))
    maze.add_room(RiddleRoom("Library", "Dusty shelves", riddle))
    maze.add_room(Center("Treasure", "Golden chest"))
    maze.add_corridor("Entrada", "Hall", 1)
    maze.add_corridor("Hall", "Treasure", 5)
    maze.add_corridor("Hall", "Library", 1)
    maze.add_corridor("Library", "Treasure", 1)
    return maze


@pytest.fixture
def lever_maze():
    maze = Maze("Lever Maze")
    maze.add_room(Entrance("Start", "Start"))
    maze.add_room(LeverRoom("Lever", "A rusty lever"))
    maze.add_room(StandardRoom("Far", "Far away"))
    maze.add_room(Center("Goal", "Goal"))
    maze.add_corridor("Start", "Lever", 1)
    maze.add_corridor("Far", "Goal", 1)
    return maze


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        maps_dir=tmp_path / "maps",
        riddles_path=tmp_path / "enigmas.json",
        reports_dir=tmp_path / "reports",
        log_file=tmp_path / "game_log.txt",
        bot_move_delay_seconds=0,
    )


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def map_data():
    return {
        "nome": "Mini",
        "dificuldade": "Fácil",
        "salas": [
            {"id": "E", "tipo": "ENTRADA", "descricao": "Entrance"},
            {"id": "R", "tipo": "ENIGMA", "descricao": "Riddle"},
            {"id": "L", "tipo": "ALAVANCA", "descricao": "Lever"},
            {"id": "T", "tipo": "TESOURO", "descricao": "Treasure"},
        ],
        "ligacoes": [
            {"origem": "E", "destino": "R", "custo": 2},
            {
                "origem": "R",
                "destino": "L",
                "custo": 3,
                "evento": {
                    "descricao": "A trap",
                    "efeito": "TRAP",
                    "item": {"nome": "Shield", "efeito": "HEAL"},
                },
            },
            {"origem": "L", "destino": "T"},
        ],
    }


@pytest.fixture
def map_file(tmp_path, map_data):
    return write_json(tmp_path / "maps" / "mini.json", map_data)


@pytest.fixture
def riddles_data():
    return {
        "enigmas": [
            {"pergunta": "Q1", "opcoes": ["a", "b"], "correta": 0},
            {"pergunta": "Q2", "opcoes": ["c", "d"], "correta": 1},
        ]
    }


@pytest.fixture
def riddles_file(tmp_path, riddles_data):
    return write_json(tmp_path / "enigmas.json", riddles_data)
