from typing import Optional

from truc_setup.rules import (
    Team,
    valid_flor_order,
    valid_game_order,
    valid_truc_order,
    truc_rejectable_stages,
    get_game_bet_extra_points,
    get_truc_points,
)


class FlorBet:

    __slots__ = ['stage', 'winner']

    def __init__(self, stage: str, winner: Optional[Team] = None):
        if stage not in valid_flor_order:
            raise ValueError(f"Unrecognized flor stage: {stage}")
        if stage == "Resto" and winner is not None:
            raise ValueError("A Resto flor bet cannot have a declared winner")
        self.stage = stage
        self.winner = winner

    def __repr__(self) -> str:
        return f"FlorBet(stage='{self.stage}', winner={self.winner!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, FlorBet):
            return NotImplemented
        return (self.stage, self.winner) == (other.stage, other.winner)


class AgreedBet:
    """Bet agreed for Secansa or Ali.

    ``winner`` is only set when the other team refused the bet.
    """

    __slots__ = ['stage', 'winner', 'val']

    def __init__(self, stage: str, winner: Optional[Team] = None, val: Optional[int] = None):
        if stage not in valid_game_order:
            raise ValueError(f"Unrecognized bet stage: {stage}")
        if stage != "Val" and val is not None:
            raise ValueError(f"Only Val bets take a val, got {stage} with {val}")
        self.stage = stage
        self.winner = winner
        self.val = val
        # Fails early on a bad val
        self.extra_points()

    def extra_points(self) -> int:
        return get_game_bet_extra_points(self.stage, self.val)

    def __repr__(self) -> str:
        return f"AgreedBet(stage='{self.stage}', winner={self.winner!r}, val={self.val!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, AgreedBet):
            return NotImplemented
        return (self.stage, self.winner, self.val) == (other.stage, other.winner, other.val)


class TrucBet:

    __slots__ = ['stage', 'winner']

    def __init__(self, stage: Optional[str] = None, winner: Optional[Team] = None):
        if stage is not None and stage not in valid_truc_order:
            raise ValueError(f"Unrecognized truc stage: {stage}")
        if winner is not None and stage not in truc_rejectable_stages:
            raise ValueError(f"A {stage} truc bet cannot have a declared winner")
        self.stage = stage
        self.winner = winner

    def points(self) -> int:
        return get_truc_points(self.stage)

    def __repr__(self) -> str:
        return f"TrucBet(stage={self.stage!r}, winner={self.winner!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TrucBet):
            return NotImplemented
        return (self.stage, self.winner) == (other.stage, other.winner)
