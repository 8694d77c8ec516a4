from dataclasses import dataclass, asdict, fields
from typing import Dict, Any, List, NamedTuple, Optional
import json
import logging

from truc_setup.rules import Team
from truc_setup import rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    cama_win_score: int = rules.cama_win_score
    coto_win_cames: int = rules.coto_win_cames
    game_win_cotos: int = rules.game_win_cotos

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {value!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, filepath) -> "GameConfig":
        with open(filepath) as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class RoundScoreSection(NamedTuple):
    team: Team
    points: int

    def to_score_delta(self) -> "CamaScore":
        if self.team == Team.TEAM1:
            return CamaScore(self.points, 0)
        return CamaScore(0, self.points)


class CamaScore(NamedTuple):
    team1: int = 0
    team2: int = 0

    def __add__(self, other: "CamaScore") -> "CamaScore":
        return CamaScore(self.team1 + other.team1, self.team2 + other.team2)

    def get(self, team: Team) -> int:
        return self.team1 if team == Team.TEAM1 else self.team2

    def max(self) -> int:
        return max(self.team1, self.team2)

    def leader(self) -> Optional[Team]:
        if self.team1 == self.team2:
            return None
        return Team.TEAM1 if self.team1 > self.team2 else Team.TEAM2


class RoundScore(NamedTuple):
    truc: RoundScoreSection
    rey: Optional[RoundScoreSection] = None
    flor: Optional[RoundScoreSection] = None
    secansa: Optional[RoundScoreSection] = None
    ali: Optional[RoundScoreSection] = None

    def sections(self) -> List[RoundScoreSection]:
        # Order in which the sections are counted towards the Cama
        ordered = [self.rey, self.flor, self.secansa, self.ali, self.truc]
        return [s for s in ordered if s is not None]

    def to_score_delta(self) -> CamaScore:
        total = CamaScore()
        for section in self.sections():
            total = total + section.to_score_delta()
        return total


class Cama:

    def __init__(self, win_score: int = rules.cama_win_score):
        self.win_score = win_score
        self.rounds: List[RoundScore] = []

    def annotate(self, score: RoundScore):
        for section in score.sections():
            if section.points < 0:
                raise ValueError(f"Round score sections cannot be negative: {section}")
        self.rounds.append(score)

    def get_current_score(self) -> CamaScore:
        total = CamaScore()
        for round_score in self.rounds:
            total = total + round_score.to_score_delta()
        return total

    def winner(self) -> Optional[Team]:
        # Sections are replayed one by one; the first team to reach the
        # threshold wins even if the other one gets there later in the round
        team1_score = 0
        team2_score = 0
        for round_score in self.rounds:
            for section in round_score.sections():
                if section.team == Team.TEAM1:
                    team1_score += section.points
                    if team1_score >= self.win_score:
                        return Team.TEAM1
                else:
                    team2_score += section.points
                    if team2_score >= self.win_score:
                        return Team.TEAM2
        return None


class Coto:

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.cames: List[Cama] = []
        self.start_cama()

    def start_cama(self):
        self.cames.append(Cama(self.config.cama_win_score))

    def get_current_cama(self) -> Cama:
        if not self.cames:
            raise RuntimeError("Coto not properly initialised")
        return self.cames[-1]

    def annotate(self, score: RoundScore) -> Optional[Team]:
        """Annotate a round; returns the Cama winner when it got sealed."""
        cama = self.get_current_cama()
        cama.annotate(score)
        cama_winner = cama.winner()
        if cama_winner is not None and self.winner() is None:
            self.start_cama()
        return cama_winner

    def cames_won(self) -> CamaScore:
        won = CamaScore()
        for cama in self.cames:
            cama_winner = cama.winner()
            if cama_winner is not None:
                won = won + RoundScoreSection(cama_winner, 1).to_score_delta()
        return won

    def winner(self) -> Optional[Team]:
        won = self.cames_won()
        for team in (Team.TEAM1, Team.TEAM2):
            if won.get(team) >= self.config.coto_win_cames:
                return team
        return None


class Scoreboard:

    def __init__(self, config: Optional[GameConfig] = None, verbose: bool = False):
        self.config = config or GameConfig()
        self.verbose = verbose
        self.cotos: List[Coto] = []
        self.start_coto()

    def start_coto(self):
        self.cotos.append(Coto(self.config))

    def get_current_coto(self) -> Coto:
        if not self.cotos:
            raise RuntimeError("Scoreboard not properly initialised")
        return self.cotos[-1]

    def get_current_cama(self) -> Cama:
        return self.get_current_coto().get_current_cama()

    def current_cama_score(self) -> CamaScore:
        return self.get_current_cama().get_current_score()

    def annotate(self, score: RoundScore):
        if self.winner() is not None:
            raise ValueError("Game already has a winner; no more rounds can be annotated.")

        coto = self.get_current_coto()
        if self.verbose:
            for section in score.sections():
                logger.debug(f"Section: {section.team.name} +{section.points}")

        cama_winner = coto.annotate(score)
        if cama_winner is None:
            return

        if self.verbose:
            logger.info(f"Cama won by {cama_winner.name} "
                        f"(cames won in coto: {tuple(coto.cames_won())})")

        coto_winner = coto.winner()
        if coto_winner is None:
            return

        if self.verbose:
            logger.info(f"Coto won by {coto_winner.name} (cotos won: {tuple(self.cotos_won())})")

        game_winner = self.winner()
        if game_winner is None:
            self.start_coto()
        elif self.verbose:
            logger.info(f"Game won by {game_winner.name}")

    def cotos_won(self) -> CamaScore:
        won = CamaScore()
        for coto in self.cotos:
            coto_winner = coto.winner()
            if coto_winner is not None:
                won = won + RoundScoreSection(coto_winner, 1).to_score_delta()
        return won

    def winner(self) -> Optional[Team]:
        won = self.cotos_won()
        for team in (Team.TEAM1, Team.TEAM2):
            if won.get(team) >= self.config.game_win_cotos:
                return team
        return None
