from adapters.map_loader import load_maze
from cli.editor import MapEditor
from core.domain.effects import Effect
from core.domain.rooms import Center, Entrance, RiddleRoom

from conftest import ScriptedIO


def test_build_and_save_map(tmp_path):
    io = ScriptedIO(
        [
            "1", "E", "ENTRADA", "Gate",
            "1", "Q", "enigma", "Sphinx",
            "1", "T", "TESOURO", "Gold",
            "2", "E", "Q", "1",
            "5", "Q", "T", "abc", "2,5", "y", "Boom", "trap",
            "3",
            "4", "my_map",
            "0",
        ]
    )
    MapEditor(io, tmp_path).run()

    saved = tmp_path / "my_map.json"
    assert "Map saved as my_map.json" in io.output
    assert "Please enter a number." in io.output
    assert "Maze Structure:" in io.output

    maze = load_maze(saved)
    assert maze.name == "my_map"
    assert isinstance(maze.get_room_by_id("E"), Entrance)
    assert isinstance(maze.get_room_by_id("Q"), RiddleRoom)
    assert isinstance(maze.get_room_by_id("T"), Center)

    corridor = maze.get_corridor_between(maze.get_room_by_id("Q"), maze.get_room_by_id("T"))
    assert corridor.weight == 2.5
    assert corridor.event.description == "Boom"
    assert corridor.event.effect is Effect.TRAP


def test_duplicate_room_and_unknown_corridor(tmp_path):
    io = ScriptedIO(
        [
            "1", "A", "NORMAL", "first",
            "1", "A",
            "2", "A", "Nowhere", "1",
            "9",
            "0",
        ]
    )
    editor = MapEditor(io, tmp_path)
    editor.run()

    assert "Room A already exists." in io.output
    assert "corridor A -> Nowhere not added" in io.output
    assert "Invalid option." in io.output
    assert len(editor.maze) == 1


def test_closed_input_cancels_and_exits(tmp_path):
    io = ScriptedIO(["2", "A"])
    MapEditor(io, tmp_path).run()
    assert "Cancelled." in io.output
    assert list(tmp_path.iterdir()) == []


def test_unknown_effect_keeps_descriptive_event(tmp_path):
    io = ScriptedIO(
        [
            "1", "A", "ENTRADA", "",
            "1", "B", "NORMAL", "",
            "5", "A", "B", "1", "s", "", "FLY",
            "0",
        ]
    )
    editor = MapEditor(io, tmp_path)
    editor.run()

    corridor = editor.maze.corridors()[0]
    assert corridor.event.description == "Mysterious event"
    assert corridor.event.effect is None
    assert "Unknown effect" in io.output
