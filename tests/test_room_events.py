from core.domain.player import Bot, Player
from core.domain.rooms import LeverResult
from core.services.room_events import RoomEventHandler

from conftest import ScriptedIO, StubRandom


def test_correct_answer_solves_riddle(small_maze):
    io = ScriptedIO(["2"])
    handler = RoomEventHandler(io, small_maze, StubRandom())
    room = small_maze.get_room_by_id("Library")
    ana = Player("Ana")

    handler.handle_riddle(room, ana)

    assert room.solved
    assert ana.solved_riddles == ["Library"]
    assert "1. 3\n2. 4\n3. 5" in io.output


def test_wrong_answer_keeps_room_blocked(small_maze):
    io = ScriptedIO(["1"])
    handler = RoomEventHandler(io, small_maze, StubRandom())
    room = small_maze.get_room_by_id("Library")

    handler.handle_riddle(room, Player("Ana"))

    assert room.blocks_exit
    assert "Wrong" in io.output


def test_non_numeric_answer(small_maze):
    io = ScriptedIO(["four"])
    handler = RoomEventHandler(io, small_maze, StubRandom())
    room = small_maze.get_room_by_id("Library")
    handler.handle_riddle(room, Player("Ana"))
    assert not room.solved
    assert "Invalid input" in io.output


def test_solved_riddle_is_not_asked_again(small_maze):
    io = ScriptedIO()
    handler = RoomEventHandler(io, small_maze, StubRandom())
    room = small_maze.get_room_by_id("Library")
    room.solved = True
    handler.handle_riddle(room, Player("Ana"))
    assert io.prompts == []


def test_bot_guesses(small_maze):
    io = ScriptedIO()
    handler = RoomEventHandler(io, small_maze, StubRandom(indexes=[1]))
    room = small_maze.get_room_by_id("Library")
    bot = Bot("Bot", smart=False, rng=StubRandom())

    handler.handle_bot_riddle(room, bot)

    assert room.solved
    assert bot.solved_riddles == ["Library"]


def test_successful_lever_opens_passage(lever_maze):
    io = ScriptedIO()
    handler = RoomEventHandler(io, lever_maze, StubRandom(floats=[0.1], indexes=[0]), lever_success_chance=0.5)
    lever = lever_maze.get_room_by_id("Lever")
    ana = Player("Ana")

    result = handler.handle_lever(ana, lever)

    assert result is LeverResult.CORRECT_CHOICE
    assert [room.id for room in lever_maze.get_neighbors(lever)] == ["Start", "Far"]
    assert ana.applied_effects == ["LEVER_UNLOCKED"]
    assert ana.encountered_events == ["Lever: Lever"]
    assert handler.handle_lever(ana, lever) is LeverResult.ALREADY_SOLVED


def test_failed_lever(lever_maze):
    io = ScriptedIO()
    handler = RoomEventHandler(io, lever_maze, StubRandom(floats=[0.9]))
    lever = lever_maze.get_room_by_id("Lever")
    ana = Player("Ana")

    assert handler.handle_lever(ana, lever) is LeverResult.INCORRECT_CHOICE
    assert ana.applied_effects == ["LEVER_FAILED"]
    assert len(lever_maze.get_neighbors(lever)) == 1
