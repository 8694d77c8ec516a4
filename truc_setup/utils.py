from typing import List, Optional, Sequence, Tuple

from truc_setup.cards import Card, get_truc_value
from truc_setup.rules import Team


def determine_baza_winner(baza: Sequence[Tuple[Card, Team]], marker: Card) -> Optional[Team]:
    """Team holding the single highest card of a trick, ``None`` for parda."""
    if not baza:
        return None

    highest = max(get_truc_value(card, marker) for card, _ in baza)
    teams = {team for card, team in baza if get_truc_value(card, marker) == highest}

    if len(teams) == 1:
        return teams.pop()
    return None


def get_truc_winner(bazas: Sequence[Optional[Team]]) -> Optional[Team]:
    """Resolve the best-of-three from the per-trick winners (``None`` is parda).

    A parda counts as won by both teams. The first team reaching two tricks
    with more tricks than the other wins. Three tricks still undecided are
    given to the winner of the first one.
    """
    team1_wins = 0
    team2_wins = 0
    for baza_winner in bazas:
        if baza_winner is None:
            team1_wins += 1
            team2_wins += 1
        elif baza_winner == Team.TEAM1:
            team1_wins += 1
        else:
            team2_wins += 1

        if team1_wins >= 2 and team1_wins > team2_wins:
            return Team.TEAM1
        if team2_wins >= 2 and team2_wins > team1_wins:
            return Team.TEAM2

    if len(bazas) < 3 or all(b is None for b in bazas):
        return None

    # A leading parda always settles the match before reaching here
    if bazas[0] is None:
        raise RuntimeError("Truc finished undecided after a parda in the first baza")
    return bazas[0]


def winners_of_bazas(bazas: Sequence[Sequence[Tuple[Card, Team]]], marker: Card) -> List[Optional[Team]]:
    return [determine_baza_winner(baza, marker) for baza in bazas]
