from enum import IntEnum
from typing import Optional


class Team(IntEnum):
    TEAM1 = 1
    TEAM2 = 2

    @classmethod
    def for_position(cls, position: int) -> "Team":
        return cls.TEAM1 if position % 2 == 0 else cls.TEAM2

    def other(self) -> "Team":
        return Team.TEAM2 if self == Team.TEAM1 else Team.TEAM1


cama_win_score: int = 40
coto_win_cames: int = 2
game_win_cotos: int = 2

cards_per_seat: int = 3

valid_player_counts = [4, 6]

flor_points_per_hand: int = 3

valid_flor_order = ["Announced", "Envit", "Resto"]

valid_game_order = ["Announced", "Envit", "Val"]

game_bet_extra_points = {
    "Announced": 0,
    "Envit":     1,
}

truc_points = {
    None:     1,
    "Truc":   3,
    "Retruc": 6,
    "NouVal": 9,
}

valid_truc_order = ["Truc", "Retruc", "NouVal"]

# Stages whose refusal hands the bet to the caller's team
truc_rejectable_stages = ["Truc", "Retruc"]


def get_truc_points(stage: Optional[str]) -> int:
    if stage not in truc_points:
        raise ValueError(f"Unrecognized truc stage: {stage}")
    return truc_points[stage]


def get_game_bet_extra_points(stage: str, val: Optional[int] = None) -> int:
    if stage == "Val":
        if val is None or val < 1:
            raise ValueError(f"Invalid val for Val bet: {val}")
        # e.g. "tres val" adds 2 points
        return val - 1
    if stage not in game_bet_extra_points:
        raise ValueError(f"Unrecognized bet stage: {stage}")
    return game_bet_extra_points[stage]
