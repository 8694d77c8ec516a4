from typing import List, Optional, Sequence
import logging

import numpy as np

from truc_setup.cards import Deck
from truc_setup.round import Round, Seat
from truc_setup.rules import Team, cards_per_seat, valid_player_counts
from truc_setup.scoreboard import GameConfig, RoundScore, Scoreboard

logger = logging.getLogger(__name__)


class Player:

    __slots__ = ['name']

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Player(name='{self.name}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)


class Game:

    def __init__(self,
                 players: Sequence[Player],
                 config: Optional[GameConfig] = None,
                 seed: Optional[int] = None,
                 verbose: bool = False):
        if len(players) not in valid_player_counts:
            raise ValueError(f"Truc is played by {valid_player_counts} players, got {len(players)}")
        if len(set(players)) != len(players):
            raise ValueError("Players must be unique")

        self.players: List[Player] = list(players)
        self.config = config or GameConfig()
        self.master_seed = seed
        self._rng = np.random.default_rng(self.master_seed)
        self.verbose = verbose

        self.scoreboard = Scoreboard(self.config, verbose=verbose)
        # Players sit in list order; the last one deals first so the first one is mano
        self.dealer = len(self.players) - 1
        self.rounds_played = 0

    def team_of(self, player: int) -> Team:
        return Team.for_position(player)

    def start_round(self) -> Round:
        sub_seed = int(self._rng.integers(2 ** 32))
        deck = Deck(seed=sub_seed)

        seats = []
        for player in range(len(self.players)):
            seat = Seat(player)
            seat.deal(deck.draw(cards_per_seat))
            seats.append(seat)
        marker = deck.draw(1)[0]

        round = Round(
            marker=marker,
            seats=seats,
            dealer=self.dealer,
            config=self.config,
            cama_score=self.scoreboard.current_cama_score(),
            verbose=self.verbose,
        )

        if self.verbose:
            logger.info(f"\n######## Round {self.rounds_played + 1} ########")
            logger.info(f"Dealer: {self.players[self.dealer].name}")
            logger.info(f"Marker: {marker}")
            for seat in seats:
                cards = ", ".join(str(c) for c in seat.hand)
                logger.info(f"Cards of {self.players[seat.player].name} "
                            f"({self.team_of(seat.player).name}): {cards}")
            logger.info(f"Cama score: {tuple(round.cama_score)}")
            logger.info("---------------")

        return round

    def finish_round(self, round: Round) -> RoundScore:
        score = round.get_score()
        if score is None:
            raise ValueError("Round cannot be finished while the Truc has no winner")

        self.scoreboard.annotate(score)
        self.rounds_played += 1
        self.dealer = (self.dealer + 1) % len(self.players)

        if self.verbose:
            logger.info(f"Round {self.rounds_played} summary:")
            logger.info(f"Points gained: {tuple(score.to_score_delta())}")
            logger.info(f"Cama score: {tuple(self.scoreboard.current_cama_score())}")
            logger.info("---------------")

        return score

    def winner(self) -> Optional[Team]:
        return self.scoreboard.winner()

    @property
    def game_over(self) -> bool:
        return self.winner() is not None
