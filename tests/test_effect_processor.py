from collections import deque

import pytest

from core.domain.effects import Effect
from core.domain.models import RandomEvent
from core.domain.player import Bot, Player
from core.errors import GameOverError
from core.services.effect_processor import EffectProcessor

from conftest import ScriptedIO, StubRandom


def make_processor(maze, players, answers=(), rng=None):
    io = ScriptedIO(answers)
    queue = deque(players)
    return EffectProcessor(io, maze, players, queue, rng or StubRandom()), io, queue


def place(maze, player, *room_ids):
    for room_id in room_ids:
        player.move_to(maze.get_room_by_id(room_id))


def test_damage_and_heal(small_maze):
    ana = Player("Ana")
    processor, _, _ = make_processor(small_maze, [ana])

    processor.apply(ana, Effect.DAMAGE)
    assert ana.power == 75
    processor.apply(ana, Effect.HEAL)
    assert ana.power == 95
    processor.apply(ana, Effect.BONUS_POWER)
    assert ana.power == 110
    assert ana.applied_effects == ["DAMAGE", "HEAL", "BONUS_POWER"]
    assert ana.encountered_events == ["TRAP", "HEAL/BONUS", "HEAL/BONUS"]


def test_trap_kills_player(small_maze):
    ana = Player("Ana", power=30)
    processor, io, _ = make_processor(small_maze, [ana])

    with pytest.raises(GameOverError):
        processor.apply_effect(ana, RandomEvent(effect=Effect.TRAP))
    assert ana.power == 0
    assert not processor.running
    assert "died" in io.output


def test_no_effect_is_noop(small_maze):
    ana = Player("Ana")
    processor, _, _ = make_processor(small_maze, [ana])
    processor.apply_effect(ana, None)
    processor.apply_effect(ana, RandomEvent(description="Nothing"))
    assert ana.power == 100
    assert ana.applied_effects == []


def test_skip_turn_and_extra_turn(small_maze):
    ana, bob = Player("Ana"), Player("Bob")
    processor, _, queue = make_processor(small_maze, [ana, bob])
    queue.popleft()

    processor.apply(ana, Effect.SKIP_TURN)
    assert ana.skip_next_turn

    processor.apply(ana, Effect.EXTRA_TURN)
    assert queue[0] is ana


def test_human_swap_position(small_maze):
    ana, bob = Player("Ana"), Player("Bob")
    place(small_maze, ana, "Entrada")
    place(small_maze, bob, "Entrada", "Hall")
    processor, io, _ = make_processor(small_maze, [ana, bob], answers=["1"])

    processor.apply(ana, Effect.SWAP_POSITION)

    assert ana.current_room.id == "Hall"
    assert bob.current_room.id == "Entrada"
    assert ana.last_swapped_room.id == "Hall"
    assert bob.last_swapped_room.id == "Entrada"
    assert io.prompts == ["Choice (1-1): "]


def test_invalid_swap_choice_cancels(small_maze):
    ana, bob = Player("Ana"), Player("Bob")
    place(small_maze, ana, "Entrada")
    place(small_maze, bob, "Hall")
    processor, io, _ = make_processor(small_maze, [ana, bob], answers=["7"])

    processor.perform_swap(ana)

    assert ana.current_room.id == "Entrada"
    assert "cancelled" in io.output


def test_bot_swap_picks_random_player(small_maze):
    bot, ana, bob = Bot("Bot", smart=False, rng=StubRandom()), Player("Ana"), Player("Bob")
    place(small_maze, bot, "Entrada")
    place(small_maze, ana, "Hall")
    place(small_maze, bob, "Library")
    processor, io, _ = make_processor(small_maze, [bot, ana, bob], rng=StubRandom(indexes=[1]))

    processor.perform_swap(bot)

    assert bot.current_room.id == "Library"
    assert bob.current_room.id == "Entrada"
    assert io.prompts == []


def test_swap_all_rotates_rooms(small_maze):
    players = [Player("A"), Player("B"), Player("C")]
    for player, room_id in zip(players, ["Entrada", "Hall", "Library"]):
        place(small_maze, player, room_id)
    processor, _, _ = make_processor(small_maze, players)

    processor.apply(players[0], Effect.SWAP_ALL)

    assert [p.current_room.id for p in players] == ["Hall", "Library", "Entrada"]


def test_swap_all_needs_two_players(small_maze):
    ana = Player("Ana")
    place(small_maze, ana, "Hall")
    processor, io, _ = make_processor(small_maze, [ana])
    processor.perform_swap_all()
    assert ana.current_room.id == "Hall"
    assert "Not enough players" in io.output


def test_recede_walks_back_two_rooms(small_maze):
    ana = Player("Ana")
    place(small_maze, ana, "Entrada", "Hall", "Library", "Treasure")
    processor, _, _ = make_processor(small_maze, [ana])

    processor.apply(ana, Effect.RECEDE)

    assert ana.current_room.id == "Hall"
    assert ana.history == ["Entrada", "Hall"]
    assert ana.applied_effects == ["RECEDE"]


def test_recede_stops_at_swapped_room(small_maze):
    ana = Player("Ana")
    place(small_maze, ana, "Entrada", "Hall", "Library")
    ana.last_swapped_room = small_maze.get_room_by_id("Hall")
    processor, io, _ = make_processor(small_maze, [ana])

    processor.perform_recede(ana, 2)

    # Hall is the limit, so nothing could be walked and history is restored
    assert ana.current_room.id == "Library"
    assert ana.history == ["Entrada", "Hall", "Library"]
    assert "could not step back" in io.output


def test_recede_right_after_swap_stays_put(small_maze):
    ana, bob = Player("Ana"), Player("Bob")
    place(small_maze, ana, "Entrada", "Hall")
    place(small_maze, bob, "Entrada", "Library")
    processor, io, _ = make_processor(small_maze, [ana, bob], answers=["1"])

    processor.apply(ana, Effect.SWAP_POSITION)
    processor.apply(ana, Effect.RECEDE)

    assert ana.current_room.id == "Library"
    assert ana.history == ["Entrada", "Hall", "Library"]
    assert "could not step back past the room reached by the last swap" in io.output


def test_recede_without_history(small_maze):
    ana = Player("Ana")
    processor, io, _ = make_processor(small_maze, [ana])
    processor.perform_recede(ana, 2)
    assert "no history" in io.output
