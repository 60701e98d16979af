"""Tests for the engine facade and tagged action dispatch."""

import pytest
from decimal import Decimal

from core.hand import HandOutcome
from core.results import ErrorKind
from core.tables import GameType
from core.game import (
    BaccaratAction,
    BaccaratSide,
    BlackjackAction,
    BlackjackMove,
    EventType,
    RouletteAction,
    RouletteBetType,
    RoundStage,
    TableGamesEngine,
    parse_action,
)
from core.game.engine import ActionParseError, EngineStatus
from core.game.roulette import describe_number


class TestParseAction:

    def test_blackjack_snake_case(self):
        action = parse_action(
            {"game_type": "blackjack", "table_id": "blackjack-1", "action": "bet", "bet": 10}
        )
        assert action == BlackjackAction(
            table_id="blackjack-1", move=BlackjackMove.BET, bet=Decimal("10")
        )

    def test_blackjack_without_bet(self):
        action = parse_action({"gameType": "blackjack", "tableId": "blackjack-1", "action": "hit"})
        assert action.move == BlackjackMove.HIT
        assert action.bet is None

    def test_roulette_camel_case(self):
        action = parse_action(
            {
                "gameType": "roulette",
                "tableId": "roulette-1",
                "bets": [
                    {"type": "straight", "numbers": [7], "amount": 5, "payout": 36},
                    {"type": "red", "amount": "2.5"},
                ],
            }
        )
        assert isinstance(action, RouletteAction)
        assert [b.bet_type for b in action.bets] == [RouletteBetType.STRAIGHT, RouletteBetType.RED]
        assert action.bets[0].numbers == (7,)
        assert action.bets[1].amount == Decimal("2.5")
        assert action.bets[1].payout is None

    def test_baccarat_camel_case(self):
        action = parse_action(
            {"gameType": "baccarat", "tableId": "baccarat-1", "betType": "banker", "amount": 20}
        )
        assert action == BaccaratAction(
            table_id="baccarat-1", bet_type=BaccaratSide.BANKER, amount=Decimal("20")
        )

    def test_unknown_game_type(self):
        with pytest.raises(ActionParseError) as excinfo:
            parse_action({"game_type": "poker", "table_id": "poker-1"})
        assert excinfo.value.message == "Unknown game type"
        assert excinfo.value.kind == ErrorKind.UNRECOGNIZED

    def test_missing_game_type(self):
        with pytest.raises(ActionParseError, match="Unknown game type"):
            parse_action({"table_id": "blackjack-1"})

    def test_unknown_blackjack_action(self):
        with pytest.raises(ActionParseError, match="Invalid action"):
            parse_action({"game_type": "blackjack", "table_id": "blackjack-1", "action": "split"})

    @pytest.mark.parametrize("bet_type", ["neighbours", None, 3])
    def test_unknown_roulette_bet_type(self, bet_type):
        with pytest.raises(ActionParseError, match="Invalid bet type"):
            parse_action(
                {
                    "game_type": "roulette",
                    "table_id": "roulette-1",
                    "bets": [{"type": bet_type, "amount": 1}],
                }
            )

    def test_bad_roulette_numbers(self):
        with pytest.raises(ActionParseError, match="Invalid bet type"):
            parse_action(
                {
                    "game_type": "roulette",
                    "table_id": "roulette-1",
                    "bets": [{"type": "split", "numbers": ["one", "two"], "amount": 1}],
                }
            )

    def test_unknown_baccarat_side(self):
        with pytest.raises(ActionParseError, match="Invalid bet type"):
            parse_action(
                {"game_type": "baccarat", "table_id": "baccarat-1", "bet_type": "dragon", "amount": 5}
            )

    @pytest.mark.parametrize("bets", [5, "straight", ["straight"], [{"type": "red", "amount": 1}, 7]])
    def test_malformed_roulette_bets(self, bets):
        with pytest.raises(ActionParseError) as excinfo:
            parse_action({"game_type": "roulette", "table_id": "roulette-1", "bets": bets})
        assert excinfo.value.message == "Invalid bet type"
        assert excinfo.value.kind == ErrorKind.VALIDATION

    def test_missing_roulette_bets(self):
        action = parse_action({"game_type": "roulette", "table_id": "roulette-1"})
        assert action.bets == ()

    @pytest.mark.parametrize("amount", [None, "ten", True, "NaN", "Infinity"])
    def test_invalid_amount(self, amount):
        with pytest.raises(ActionParseError) as excinfo:
            parse_action(
                {"game_type": "baccarat", "table_id": "baccarat-1", "bet_type": "tie", "amount": amount}
            )
        assert excinfo.value.message == "Invalid bet amount"
        assert excinfo.value.kind == ErrorKind.VALIDATION


class TestProcessAction:

    def test_blackjack_round_through_actions(self, engine, stack_blackjack, gold):
        stack_blackjack("TS 9H 7D TC")

        bet = engine.process_action(
            "alice",
            {"gameType": "blackjack", "tableId": "blackjack-1", "action": "bet", "bet": "50"},
        )
        assert bet.success
        assert bet.outcome.player_score == 19

        stand = engine.process_action(
            "alice", {"game_type": "blackjack", "table_id": "blackjack-1", "action": "stand"}
        )
        assert stand.outcome.result == HandOutcome.WIN
        assert stand.outcome.dealer_score == 17
        assert stand.outcome.payout == Decimal("100")
        assert gold("alice") == Decimal("1100")

    def test_roulette(self, engine, monkeypatch, gold):
        monkeypatch.setattr(engine.roulette_resolver, "spin", lambda: describe_number(7))
        result = engine.process_action(
            "alice",
            {
                "game_type": "roulette",
                "table_id": "roulette-1",
                "bets": [{"bet_type": "straight", "numbers": [7], "amount": 1}],
            },
        )
        assert result.outcome.total_payout == Decimal("36")
        assert gold("alice") == Decimal("1036")

    def test_baccarat(self, engine):
        result = engine.process_action(
            "alice",
            {"game_type": "baccarat", "table_id": "baccarat-1", "bet_type": "player", "amount": 10},
        )
        assert result.success
        assert result.outcome.bet_type == BaccaratSide.PLAYER

    def test_parse_failure_is_reported(self, engine, events):
        result = engine.process_action("alice", {"game_type": "craps", "table_id": "x"})

        assert not result.success
        assert result.error == "Unknown game type"
        assert result.kind == ErrorKind.UNRECOGNIZED
        rejected = [e for e in events.history if e.event_type == EventType.INVALID_ACTION]
        assert rejected[-1].data["message"] == "Unknown game type"

    @pytest.mark.parametrize("bets", [5, ["straight"]])
    def test_malformed_roulette_bets_are_reported(self, engine, gold, bets):
        result = engine.process_action(
            "alice", {"game_type": "roulette", "table_id": "roulette-1", "bets": bets}
        )
        assert not result.success
        assert result.error == "Invalid bet type"
        assert gold("alice") == Decimal("1000")

    def test_non_finite_blackjack_bet_is_reported(self, engine):
        result = engine.process_action(
            "alice",
            {"game_type": "blackjack", "table_id": "blackjack-1", "action": "bet", "bet": "NaN"},
        )
        assert result.error == "Invalid bet amount"
        assert "blackjack-1" not in engine.store

    def test_game_type_must_match_table(self, engine):
        result = engine.process_action(
            "alice",
            {"game_type": "roulette", "table_id": "blackjack-1", "bets": []},
        )
        assert result.error == "Invalid roulette table"
        assert result.kind == ErrorKind.NOT_FOUND

    def test_execute_typed_action(self, engine):
        result = engine.execute(
            "alice", BaccaratAction(table_id="baccarat-1", bet_type=BaccaratSide.TIE, amount=Decimal("1"))
        )
        assert result.success

    def test_execute_rejects_other_objects(self, engine):
        result = engine.execute("alice", object())
        assert result.error == "Unknown game type"


class TestValidateAction:

    @pytest.mark.parametrize("game_type", ["blackjack", "roulette", "baccarat"])
    def test_known_game_types(self, engine, game_type):
        assert engine.validate_action({"game_type": game_type})
        assert engine.validate_action({"gameType": game_type})

    @pytest.mark.parametrize("payload", [{}, {"game_type": "poker"}, {"game_type": ["blackjack"]}])
    def test_unknown_game_types(self, engine, payload):
        assert not engine.validate_action(payload)

    def test_does_not_check_the_rest(self, engine):
        assert engine.validate_action({"game_type": "blackjack", "action": "fold"})


class TestTables:

    def test_get_tables(self, engine):
        assert [t.game_type for t in engine.get_tables()] == [
            GameType.BLACKJACK,
            GameType.ROULETTE,
            GameType.BACCARAT,
        ]

    def test_get_table(self, engine):
        assert engine.get_table("roulette-1").name == "European Roulette"
        assert engine.get_table("missing") is None

    def test_join_table(self, engine):
        result = engine.join_table("alice", "baccarat-1")
        assert result.success
        assert result.outcome.table_id == "baccarat-1"

    def test_join_unknown_table(self, engine):
        result = engine.join_table("alice", "missing")
        assert result.error == "Table not found"
        assert result.kind == ErrorKind.NOT_FOUND

    def test_join_unknown_player(self, engine):
        assert engine.join_table("mallory", "blackjack-1").error == "Player not found"

    def test_join_does_not_reserve_seats(self, engine, wallet):
        for i in range(10):
            wallet.register(f"p{i}")
            assert engine.join_table(f"p{i}", "blackjack-1").success


class TestEngineState:

    def test_lifecycle(self, wallet):
        engine = TableGamesEngine(wallet)
        assert engine.get_game_state().status == EngineStatus.WAITING
        engine.start()
        assert engine.get_game_state().status == EngineStatus.PLAYING
        engine.stop()
        assert engine.get_game_state().status == EngineStatus.ENDED

    def test_state_without_round(self, engine):
        state = engine.get_game_state()
        assert len(state.tables) == 3
        assert state.round is None
        assert engine.get_game_state("blackjack-1").round is None

    def test_state_with_round(self, engine, stack_blackjack):
        stack_blackjack("TS 6H 7D TC")
        engine.play_blackjack("alice", "blackjack-1", "bet", Decimal("10"))

        snapshot = engine.get_game_state("blackjack-1").round
        assert snapshot.stage == RoundStage.PLAYING
        assert snapshot.round_number == 1
        assert snapshot.dealer_upcard.rank.value == 7
        assert [h.player_id for h in snapshot.hands] == ["alice"]
        assert snapshot.hands[0].score == 16
        assert not snapshot.hands[0].is_soft
        assert not snapshot.hands[0].is_busted
        assert snapshot.cards_remaining == 0

    def test_state_reports_soft_and_bust(self, engine, stack_blackjack):
        stack_blackjack("AS 6H 7D TC 9S 8S")
        engine.play_blackjack("alice", "blackjack-1", "bet", Decimal("10"))
        soft = engine.get_game_state("blackjack-1").round.hands[0]
        assert soft.score == 17 and soft.is_soft

        engine.play_blackjack("alice", "blackjack-1", "hit")
        engine.play_blackjack("alice", "blackjack-1", "hit")
        busted = engine.get_game_state("blackjack-1").round.hands[0]
        assert busted.score == 24
        assert busted.is_busted and not busted.is_soft

    def test_snapshot_is_detached(self, engine, stack_blackjack):
        stack_blackjack("TS 6H 7D TC 5S")
        engine.play_blackjack("alice", "blackjack-1", "bet", Decimal("10"))
        before = engine.get_game_state("blackjack-1").round

        engine.play_blackjack("alice", "blackjack-1", "hit")

        assert len(before.hands[0].cards) == 2
        assert len(engine.get_game_state("blackjack-1").round.hands[0].cards) == 3

    def test_subscribe(self, engine):
        seen = []
        engine.subscribe(seen.append, EventType.BACCARAT_DEALT)
        engine.play_baccarat("alice", "baccarat-1", BaccaratSide.TIE, Decimal("1"))
        assert [e.event_type for e in seen] == [EventType.BACCARAT_DEALT]
