import json
import logging

import pytest

from adapters.map_loader import load_maze, read_map_summary, save_maze
from adapters.riddle_loader import load_riddles
from core.domain.effects import Effect
from core.domain.models import Riddle
from core.domain.rooms import Center, Entrance, LeverRoom, RiddleRoom, StandardRoom
from core.errors import InvalidMapError
from core.resources_loader import discover_maps, get_default_maps_dir, get_default_riddles_path

from conftest import write_json


@pytest.fixture
def riddles():
    return [
        Riddle(question="Q1", options=["a", "b"], correct_index=0),
        Riddle(question="Q2", options=["c", "d"], correct_index=1),
    ]


def test_load_full_map(map_file, riddles):
    maze = load_maze(map_file, riddles)

    assert maze.name == "Mini"
    assert [type(room) for room in maze.rooms()] == [Entrance, RiddleRoom, LeverRoom, Center]
    assert maze.get_room_by_id("R").riddle.question == "Q1"

    r, lever = maze.get_room_by_id("R"), maze.get_room_by_id("L")
    corridor = maze.get_corridor_between(r, lever)
    assert corridor.weight == 3
    assert corridor.event.description == "A trap"
    assert corridor.event.effect is Effect.TRAP
    assert corridor.event.item.name == "Shield"
    assert corridor.event.item.effect is Effect.HEAL

    # missing cost defaults to 1
    assert maze.get_corridor_between(lever, maze.get_room_by_id("T")).weight == 1.0


def test_missing_file_gives_empty_maze(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        maze = load_maze(tmp_path / "ghost.json")
    assert maze.is_empty()
    assert "not found" in caplog.text


def test_malformed_json_raises(tmp_path):
    path = write_json(tmp_path / "broken.json", "{not json")
    with pytest.raises(InvalidMapError):
        load_maze(path)


def test_missing_name_and_rooms(tmp_path):
    maze = load_maze(write_json(tmp_path / "m.json", {"ligacoes": []}))
    assert maze.name == "Unknown Map"
    assert maze.is_empty()


def test_invalid_entries_are_skipped(tmp_path, caplog):
    data = {
        "nome": "Lenient",
        "salas": [
            {"id": "A", "tipo": "ENTRADA"},
            {"tipo": "NORMAL", "descricao": "no id"},
            "not a room",
            {"id": "B", "tipo": "MYSTERY"},
            {"id": "C", "tipo": "center"},
        ],
        "ligacoes": [
            {"origem": "A", "destino": "B", "custo": "cheap"},
            {"origem": "A"},
            {"origem": "B", "destino": "Ghost"},
            {"origem": "B", "destino": "C", "evento": {"descricao": "Odd", "efeito": "FLY"}},
        ],
    }
    with caplog.at_level(logging.WARNING):
        maze = load_maze(write_json(tmp_path / "m.json", data))

    assert [room.id for room in maze.rooms()] == ["A", "B", "C"]
    assert isinstance(maze.get_room_by_id("B"), StandardRoom)
    assert isinstance(maze.get_room_by_id("C"), Center)
    assert len(maze.corridors()) == 2
    a, b, c = (maze.get_room_by_id(x) for x in "ABC")
    assert maze.get_corridor_between(a, b).weight == 1.0
    event = maze.get_corridor_between(b, c).event
    assert event.description == "Odd"
    assert event.effect is None
    assert "Unknown effect" in caplog.text


def test_riddle_pool_is_recycled(tmp_path, riddles):
    data = {
        "nome": "Riddles",
        "salas": [{"id": f"R{i}", "tipo": "ENIGMA"} for i in range(3)],
        "ligacoes": [],
    }
    maze = load_maze(write_json(tmp_path / "m.json", data), riddles)
    assert [room.riddle.question for room in maze.rooms()] == ["Q1", "Q2", "Q1"]


def test_riddle_rooms_without_pool(map_file):
    maze = load_maze(map_file)
    assert maze.get_room_by_id("R").riddle is None


def test_read_map_summary(map_file):
    summary = read_map_summary(map_file)
    assert (summary.name, summary.difficulty, summary.rooms, summary.corridors) == ("Mini", "Fácil", 4, 3)


def test_save_then_load_preserves_map(map_file, tmp_path):
    original = load_maze(map_file)
    out = save_maze(original, "Copy", tmp_path / "out" / "copy.json")

    raw = json.loads(out.read_text(encoding="utf-8"))
    assert raw["nome"] == "Copy"
    assert raw["salas"][0] == {"id": "E", "tipo": "ENTRADA", "descricao": "Entrance"}
    assert raw["ligacoes"][1]["evento"]["efeito"] == "TRAP"

    copy = load_maze(out)
    assert [(r.id, r.kind, r.description) for r in copy.rooms()] == [
        (r.id, r.kind, r.description) for r in original.rooms()
    ]
    assert [str(c) for c in copy.corridors()] == [str(c) for c in original.corridors()]
    r, lever = copy.get_room_by_id("R"), copy.get_room_by_id("L")
    assert copy.get_corridor_between(r, lever).event.item.name == "Shield"


def test_bundled_maps_load():
    riddles = load_riddles(get_default_riddles_path())
    maps = discover_maps(get_default_maps_dir())
    assert maps
    for path in maps:
        maze = load_maze(path, riddles)
        assert maze.get_entrance() is not None
        assert maze.get_treasure_room() is not None
        assert maze.is_connected()
