from typing import Optional, TYPE_CHECKING, Type
import logging

from truc_setup.bets import AgreedBet, FlorBet, TrucBet
from truc_setup.cards import REY
from truc_setup.hands import Ali, Flor, Hand, Secansa
from truc_setup.rules import Team, flor_points_per_hand
from truc_setup.scoreboard import RoundScoreSection
from truc_setup.utils import get_truc_winner, winners_of_bazas

if TYPE_CHECKING:
    from truc_setup.round import Round

logger = logging.getLogger(__name__)


def _resolve_winner(bet_winner: Optional[Team], round: "Round", hand_cls: Type[Hand]) -> Optional[Team]:
    # A refused bet names its winner directly
    if bet_winner is not None:
        return bet_winner
    return round.get_winner_from_cards(hand_cls)


class ReyScorer:

    def get_score(self, round: "Round") -> Optional[RoundScoreSection]:
        winner = None
        for _, team, seat in round.iter_from_hand():
            if any(card.value == REY for card in seat.face_up_cards):
                winner = team
                break

        if winner is None:
            return None

        rey_count = sum(
            1
            for _, team, seat in round.iter_from_hand() if team == winner
            for card in seat.face_up_cards if card.value == REY
        )
        return RoundScoreSection(winner, rey_count)


class FlorScorer:

    def __init__(self):
        self.flor_bet: Optional[FlorBet] = None

    def set_bet(self, bet: FlorBet):
        self.flor_bet = bet

    def get_score(self, round: "Round") -> Optional[RoundScoreSection]:
        # Game must've been announced to be scored
        if self.flor_bet is None:
            return None

        winner = _resolve_winner(self.flor_bet.winner, round, Flor)
        if winner is None:
            return None

        hands = round.get_hands(Flor)
        winner_flor_count = sum(1 for _, team, _ in hands if team == winner)
        total_flor_count = len(hands)

        if self.flor_bet.stage == "Announced":
            score = winner_flor_count * flor_points_per_hand
        elif self.flor_bet.stage == "Envit":
            score = total_flor_count * flor_points_per_hand
        else:
            resto = max(0, round.config.cama_win_score - round.cama_score.max())
            score = total_flor_count * flor_points_per_hand + resto

        logger.debug(f"Flor {self.flor_bet.stage}: {winner.name} scores {score}")
        return RoundScoreSection(winner, score)


class _GameScorer:
    hand_cls: Type[Hand] = Hand

    def __init__(self):
        self.agreed_bet: Optional[AgreedBet] = None

    def set_bet(self, bet: AgreedBet):
        self.agreed_bet = bet

    def get_score(self, round: "Round") -> Optional[RoundScoreSection]:
        # Game must've been announced to be scored
        if self.agreed_bet is None:
            return None

        winner = _resolve_winner(self.agreed_bet.winner, round, self.hand_cls)
        if winner is None:
            return None

        games_value = sum(hand.score() for _, team, hand in round.get_hands(self.hand_cls) if team == winner)
        total = games_value + self.agreed_bet.extra_points()

        logger.debug(f"{self.hand_cls.__name__} {self.agreed_bet.stage}: {winner.name} scores {total}")
        return RoundScoreSection(winner, total)


class SecansaScorer(_GameScorer):
    hand_cls = Secansa


class AliScorer(_GameScorer):
    hand_cls = Ali


class TrucScorer:

    def __init__(self):
        self.agreed_bet = TrucBet()

    def set_bet(self, bet: TrucBet):
        self.agreed_bet = bet

    def get_score(self, round: "Round") -> Optional[RoundScoreSection]:
        if self.agreed_bet.winner is not None:
            winner = self.agreed_bet.winner
        else:
            bazas = winners_of_bazas(round.get_bazas(), round.marker)
            winner = get_truc_winner(bazas)

        if winner is None:
            return None
        return RoundScoreSection(winner, self.agreed_bet.points())
