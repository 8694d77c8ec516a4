from typing import Iterator, List, Optional, Sequence, Tuple, Type
import logging

from truc_setup.cards import Card
from truc_setup.hands import Hand
from truc_setup.rules import Team
from truc_setup.scoreboard import CamaScore, GameConfig, RoundScore
from truc_setup.scorers import AliScorer, FlorScorer, ReyScorer, SecansaScorer, TrucScorer

logger = logging.getLogger(__name__)


class Seat:

    def __init__(self, player: int):
        self.player = player
        self.hand: List[Card] = []
        self.face_up_cards: List[Card] = []

    def deal(self, cards: Sequence[Card]):
        self.hand = list(cards)

    def discard(self, card: Card):
        if card in self.hand:
            self.hand.remove(card)

    def show(self, card: Card):
        if card in self.hand:
            self.hand.remove(card)
            self.face_up_cards.append(card)

    def __repr__(self) -> str:
        return (f"Seat(player={self.player}, hand={[str(c) for c in self.hand]}, "
                f"face_up_cards={[str(c) for c in self.face_up_cards]})")


class Round:

    def __init__(self,
                 marker: Card,
                 seats: Sequence[Seat],
                 dealer: int,
                 config: Optional[GameConfig] = None,
                 cama_score: Optional[CamaScore] = None,
                 verbose: bool = False):
        self.marker = marker
        self.seats: List[Seat] = list(seats)
        self.dealer = dealer
        self.config = config or GameConfig()
        self.cama_score = cama_score or CamaScore()
        self.verbose = verbose

        self.rey_scorer = ReyScorer()
        self.flor_scorer = FlorScorer()
        self.secansa_scorer = SecansaScorer()
        self.ali_scorer = AliScorer()
        self.truc_scorer = TrucScorer()

    def get_team(self, position: int) -> Team:
        return Team.for_position(position)

    def dealer_position(self) -> int:
        for position, seat in enumerate(self.seats):
            if seat.player == self.dealer:
                return position
        raise ValueError(f"Dealer (player {self.dealer}) has no seat in this round")

    def show(self, position: int, card: Card):
        self.seats[position].show(card)
        if self.verbose:
            logger.debug(f"Seat {position} shows {card}")

    def iter_from_hand(self) -> Iterator[Tuple[int, Team, Seat]]:
        """Seats in play order, starting with the one after the dealer."""
        n_seats = len(self.seats)
        first = self.dealer_position() + 1
        for offset in range(n_seats):
            position = (first + offset) % n_seats
            yield position, self.get_team(position), self.seats[position]

    def get_hands(self, hand_cls: Type[Hand]) -> List[Tuple[int, Team, Hand]]:
        hands = []
        for position, team, seat in self.iter_from_hand():
            hand = hand_cls.from_cards(seat.face_up_cards, self.marker)
            if hand is not None:
                hands.append((position, team, hand))
        return hands

    def get_winner_from_cards(self, hand_cls: Type[Hand]) -> Optional[Team]:
        best_hand = None
        winner = None
        for _, team, hand in self.get_hands(hand_cls):
            # Only a strictly better hand replaces the current one, so ties
            # go to the seat closest after the dealer
            if best_hand is None or hand > best_hand:
                best_hand = hand
                winner = team
        return winner

    def get_bazas(self) -> List[List[Tuple[Card, Team]]]:
        max_cards = max((len(seat.face_up_cards) for seat in self.seats), default=0)
        bazas = []
        for i in range(max_cards):
            baza = []
            for position, seat in enumerate(self.seats):
                if i < len(seat.face_up_cards):
                    baza.append((seat.face_up_cards[i], self.get_team(position)))
            bazas.append(baza)
        return bazas

    def get_score(self) -> Optional[RoundScore]:
        truc = self.truc_scorer.get_score(self)
        if truc is None:
            if self.verbose:
                logger.debug("Truc is still undecided, round cannot be scored yet.")
            return None

        score = RoundScore(
            truc=truc,
            rey=self.rey_scorer.get_score(self),
            flor=self.flor_scorer.get_score(self),
            secansa=self.secansa_scorer.get_score(self),
            ali=self.ali_scorer.get_score(self),
        )

        if self.verbose:
            logger.info(f"Round score: {score}")
        return score
