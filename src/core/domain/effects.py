"""Efectos que los eventos de corredor aplican a los jugadores."""

from __future__ import annotations

from enum import Enum


class Effect(str, Enum):
    """Named effect; `amount` is the power delta or, for RECEDE, the rooms to step back."""

    HEAL = "HEAL"
    DAMAGE = "DAMAGE"
    BONUS_POWER = "BONUS_POWER"
    TRAP = "TRAP"
    SKIP_TURN = "SKIP_TURN"
    SWAP_POSITION = "SWAP_POSITION"
    SWAP_ALL = "SWAP_ALL"
    EXTRA_TURN = "EXTRA_TURN"
    RECEDE = "RECEDE"

    @property
    def amount(self) -> int:
        return _AMOUNTS[self]

    @property
    def interrupts_move(self) -> bool:
        """True when the effect relocates the player before the move completes."""

        return self in (Effect.SWAP_ALL, Effect.SWAP_POSITION, Effect.RECEDE)

    @classmethod
    def parse(cls, text: str | None) -> "Effect | None":
        """Case-insensitive lookup; unknown or empty text gives None."""

        if not text:
            return None
        try:
            return cls(text.strip().upper())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


_AMOUNTS: dict[Effect, int] = {
    Effect.HEAL: 20,
    Effect.DAMAGE: 25,
    Effect.BONUS_POWER: 15,
    Effect.TRAP: -30,
    Effect.SKIP_TURN: 0,
    Effect.SWAP_POSITION: 0,
    Effect.SWAP_ALL: 0,
    Effect.EXTRA_TURN: 0,
    Effect.RECEDE: 2,
}
