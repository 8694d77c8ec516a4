from __future__ import annotations

import argparse
from typing import List

import numpy as np
import pandas as pd

from truc_setup.cards import get_truc_value
from truc_setup.game import Game, Player
from truc_setup.hands import HAND_TYPES
from truc_setup.round import Round
from truc_setup.rules import valid_player_counts


def _reveal_all(round: Round) -> None:
    for seat in round.seats:
        for card in list(seat.hand):
            seat.show(card)


def _collect_round_rows(round: Round, game_seed: int, round_number: int) -> List[dict]:
    _reveal_all(round)

    winners = {name: round.get_winner_from_cards(cls) for name, cls in HAND_TYPES.items()}

    rows: List[dict] = []
    for position, team, seat in round.iter_from_hand():
        cards = seat.face_up_cards
        strengths = [int(get_truc_value(c, round.marker)) for c in cards]

        row: dict = {
            "game_seed": game_seed,
            "round_number": round_number,
            "position": position,
            "team": team.name,
            "is_dealer": int(seat.player == round.dealer),
            "marker": str(round.marker),
            "strength_sum": int(np.sum(strengths)),
            "strength_max": int(np.max(strengths)),
        }
        for i, (card, strength) in enumerate(zip(cards, strengths), start=1):
            row[f"card{i}_str"] = str(card)
            row[f"strength{i}"] = strength

        for name, cls in HAND_TYPES.items():
            hand = cls.from_cards(cards, round.marker)
            row[f"has_{name}"] = int(hand is not None)
            row[f"{name}_score"] = hand.score() if hand is not None else 0
            row[f"team_wins_{name}"] = int(winners[name] == team)

        rows.append(row)
    return rows


def generate_dataset(num_rounds: int, output_csv: str, seed: int = 0, num_players: int = 4) -> pd.DataFrame:
    if num_players not in valid_player_counts:
        raise ValueError(f"Truc is played by {valid_player_counts} players, got {num_players}")

    rng = np.random.default_rng(seed)
    all_rows: List[dict] = []

    game_seed = int(rng.integers(2 ** 32))
    game = Game([Player(f"player_{i}") for i in range(num_players)], seed=game_seed)
    for round_number in range(1, num_rounds + 1):
        round = game.start_round()
        all_rows.extend(_collect_round_rows(round, game_seed, round_number))
        # Rotate the dealer without touching the scoreboard
        game.dealer = (game.dealer + 1) % num_players

    df = pd.DataFrame(all_rows)
    df.to_csv(output_csv, index=False)
    print(f"Saved {len(df):,} rows to {output_csv}")
    return df


def main(argv=None) -> None:
    p = argparse.ArgumentParser(description="Generate Truc hand evaluation dataset")
    p.add_argument("--num_rounds", type=int, default=10000, help="Rounds to deal (default 10000)")
    p.add_argument("--players", type=int, default=4, choices=valid_player_counts, help="Players at the table")
    p.add_argument("--output", type=str, default="truc_hand_data.csv", help="CSV output path")
    p.add_argument("--seed", type=int, default=42, help="Global RNG seed")
    args = p.parse_args(argv)

    generate_dataset(args.num_rounds, args.output, args.seed, args.players)


if __name__ == "__main__":
    main()
