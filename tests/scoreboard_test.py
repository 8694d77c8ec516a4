import json
import os
import tempfile

import pytest
from truc_setup.rules import Team
from truc_setup.scoreboard import (
    GameConfig,
    RoundScoreSection,
    RoundScore,
    CamaScore,
    Cama,
    Coto,
    Scoreboard,
)

T1 = Team.TEAM1
T2 = Team.TEAM2


def truc_only(team, points):
    return RoundScore(truc=RoundScoreSection(team, points))


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.cama_win_score == 40
        assert config.coto_win_cames == 2
        assert config.game_win_cotos == 2

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="cama_win_score must be a positive integer"):
            GameConfig(cama_win_score=0)
        with pytest.raises(ValueError, match="coto_win_cames must be a positive integer"):
            GameConfig(coto_win_cames=-1)
        with pytest.raises(ValueError, match="game_win_cotos must be a positive integer"):
            GameConfig(game_win_cotos="2")

    def test_dict_round_trip(self):
        config = GameConfig.from_dict({"cama_win_score": 20})
        assert config.cama_win_score == 20
        assert config.to_dict() == {"cama_win_score": 20, "coto_win_cames": 2, "game_win_cotos": 2}

    def test_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            GameConfig.from_dict({"max_points": 30})

    def test_from_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w") as f:
                json.dump({"cama_win_score": 12, "game_win_cotos": 3}, f)
            config = GameConfig.from_json(path)
        assert config == GameConfig(cama_win_score=12, coto_win_cames=2, game_win_cotos=3)


class TestRoundScore:
    def test_section_delta(self):
        assert RoundScoreSection(T1, 3).to_score_delta() == CamaScore(3, 0)
        assert RoundScoreSection(T2, 5).to_score_delta() == CamaScore(0, 5)

    def test_sections_order(self):
        score = RoundScore(
            truc=RoundScoreSection(T1, 1),
            ali=RoundScoreSection(T2, 5),
            rey=RoundScoreSection(T2, 1),
        )
        assert score.sections() == [
            RoundScoreSection(T2, 1),
            RoundScoreSection(T2, 5),
            RoundScoreSection(T1, 1),
        ]
        assert score.to_score_delta() == CamaScore(1, 6)

    def test_cama_score_helpers(self):
        score = CamaScore(12, 30)
        assert score.max() == 30
        assert score.get(T1) == 12
        assert score.leader() == T2
        assert CamaScore(3, 3).leader() is None


class TestCama:
    def test_annotate(self):
        round_score = RoundScore(
            truc=RoundScoreSection(T1, 1),
            flor=RoundScoreSection(T1, 3),
            secansa=RoundScoreSection(T1, 1),
            ali=RoundScoreSection(T2, 5),
        )
        cama = Cama()
        assert len(cama.rounds) == 0
        cama.annotate(round_score)
        assert cama.rounds == [round_score]

    def test_get_current_score(self):
        cama = Cama()
        cama.annotate(RoundScore(
            truc=RoundScoreSection(T1, 1),
            flor=RoundScoreSection(T1, 3),
            secansa=RoundScoreSection(T1, 1),
            ali=RoundScoreSection(T2, 5),
        ))
        cama.annotate(RoundScore(
            truc=RoundScoreSection(T1, 1),
            rey=RoundScoreSection(T1, 2),
            flor=RoundScoreSection(T2, 6),
            secansa=RoundScoreSection(T1, 3),
            ali=RoundScoreSection(T1, 1),
        ))
        assert cama.get_current_score() == CamaScore(12, 11)

    def test_winner_is_first_to_reach_threshold(self):
        cama = Cama()
        cama.annotate(RoundScore(
            truc=RoundScoreSection(T2, 34),
            flor=RoundScoreSection(T1, 35),
        ))
        assert cama.winner() is None

        cama.annotate(RoundScore(
            rey=RoundScoreSection(T2, 1),       # T2: 35
            flor=RoundScoreSection(T1, 3),      # T1: 38
            secansa=RoundScoreSection(T1, 1),   # T1: 39
            ali=RoundScoreSection(T2, 5),       # T2: 40
            truc=RoundScoreSection(T1, 1),      # T1: 40, too late
        ))
        assert cama.winner() == T2

    def test_custom_threshold(self):
        cama = Cama(win_score=5)
        cama.annotate(truc_only(T1, 4))
        assert cama.winner() is None
        cama.annotate(truc_only(T1, 1))
        assert cama.winner() == T1

    def test_negative_points_rejected(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            Cama().annotate(truc_only(T1, -1))


class TestCoto:
    def test_new(self):
        coto = Coto()
        assert len(coto.cames) == 1
        assert coto.get_current_cama().rounds == []

    def test_start_cama(self):
        coto = Coto()
        coto.start_cama()
        assert len(coto.cames) == 2

    def test_sealed_cama_starts_a_new_one(self):
        coto = Coto()
        assert coto.annotate(truc_only(T1, 40)) == T1
        assert len(coto.cames) == 2
        assert coto.get_current_cama().rounds == []
        assert coto.winner() is None

    def test_two_cames_win_the_coto(self):
        coto = Coto()
        coto.annotate(truc_only(T1, 40))
        coto.annotate(truc_only(T2, 40))
        assert coto.cames_won() == CamaScore(1, 1)
        assert coto.winner() is None
        coto.annotate(truc_only(T1, 41))
        assert coto.winner() == T1
        # A sealed coto does not open another cama
        assert len(coto.cames) == 3

    def test_empty_coto(self):
        coto = Coto()
        coto.cames = []
        with pytest.raises(RuntimeError, match="Coto not properly initialised"):
            coto.get_current_cama()


class TestScoreboard:
    def test_new(self):
        scoreboard = Scoreboard()
        assert len(scoreboard.cotos) == 1
        assert scoreboard.current_cama_score() == CamaScore(0, 0)
        assert scoreboard.winner() is None

    def test_forty_points_seal_the_cama(self):
        scoreboard = Scoreboard()
        scoreboard.annotate(truc_only(T1, 40))
        coto = scoreboard.get_current_coto()
        assert len(scoreboard.cotos) == 1
        assert len(coto.cames) == 2
        assert coto.cames[0].winner() == T1
        assert scoreboard.current_cama_score() == CamaScore(0, 0)

    def test_two_cames_seal_the_coto(self):
        scoreboard = Scoreboard()
        scoreboard.annotate(truc_only(T1, 40))
        scoreboard.annotate(truc_only(T1, 40))
        assert scoreboard.cotos[0].winner() == T1
        assert len(scoreboard.cotos) == 2
        assert scoreboard.cotos_won() == CamaScore(1, 0)
        assert scoreboard.winner() is None

    def test_game_winner(self):
        scoreboard = Scoreboard()
        for team in [T2, T2, T1, T2, T2]:
            scoreboard.annotate(truc_only(team, 40))
        assert scoreboard.winner() == T2
        assert scoreboard.winner() == T2
        assert len(scoreboard.cotos) == 2

        with pytest.raises(ValueError, match="Game already has a winner"):
            scoreboard.annotate(truc_only(T1, 1))

    def test_sealed_units_are_not_modified(self):
        scoreboard = Scoreboard()
        scoreboard.annotate(truc_only(T1, 20))
        scoreboard.annotate(truc_only(T1, 25))
        first_cama = scoreboard.get_current_coto().cames[0]
        rounds = list(first_cama.rounds)

        scoreboard.annotate(truc_only(T2, 10))
        scoreboard.annotate(truc_only(T2, 35))

        assert first_cama.rounds == rounds
        assert first_cama.get_current_score() == CamaScore(45, 0)
        assert scoreboard.get_current_coto().cames[1].winner() == T2

    def test_points_accumulate(self):
        scoreboard = Scoreboard()
        scoreboard.annotate(truc_only(T1, 3))
        scoreboard.annotate(RoundScore(truc=RoundScoreSection(T2, 1), rey=RoundScoreSection(T1, 2)))
        assert scoreboard.current_cama_score() == CamaScore(5, 1)

    def test_thresholds_are_threaded(self):
        config = GameConfig(cama_win_score=10, coto_win_cames=1, game_win_cotos=1)
        scoreboard = Scoreboard(config)
        scoreboard.annotate(truc_only(T2, 9))
        assert scoreboard.winner() is None
        scoreboard.annotate(truc_only(T2, 1))
        assert scoreboard.winner() == T2

    def test_verbose_logging(self, caplog):
        scoreboard = Scoreboard(verbose=True)
        with caplog.at_level("INFO", logger="truc_setup.scoreboard"):
            scoreboard.annotate(truc_only(T1, 40))
        assert "Cama won by TEAM1" in caplog.text

    def test_empty_scoreboard(self):
        scoreboard = Scoreboard()
        scoreboard.cotos = []
        with pytest.raises(RuntimeError, match="Scoreboard not properly initialised"):
            scoreboard.get_current_coto()
