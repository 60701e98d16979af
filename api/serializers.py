"""Convert engine values to response schemas."""

from typing import Iterable

from api.schemas import (
    BaccaratHandResponse,
    BaccaratResponse,
    BaccaratResultResponse,
    BlackjackResponse,
    CardResponse,
    EngineStateResponse,
    HandStateResponse,
    LimitsResponse,
    PlayerResponse,
    RouletteBetResultResponse,
    RouletteResponse,
    RoundStateResponse,
    SpinResponse,
    TableResponse,
)
from core.cards import Card
from core.tables import Table
from core.wallet import Player
from core.game.baccarat import BaccaratHand, BaccaratOutcome
from core.game.blackjack import BetOutcome, HitOutcome, SettlementOutcome
from core.game.engine import EngineState
from core.game.roulette import RouletteOutcome
from core.game.state import RoundSnapshot


def card_response(card: Card) -> CardResponse:
    return CardResponse(rank=str(card.rank), suit=card.suit.name.lower(), value=card.value)


def cards_response(cards: Iterable[Card]) -> list[CardResponse]:
    return [card_response(c) for c in cards]


def table_response(table: Table) -> TableResponse:
    return TableResponse(
        table_id=table.table_id,
        game_type=table.game_type.value,
        name=table.name,
        min_bet=LimitsResponse(gc=float(table.min_bet.gc), sc=float(table.min_bet.sc)),
        max_bet=LimitsResponse(gc=float(table.max_bet.gc), sc=float(table.max_bet.sc)),
        max_players=table.max_players,
        house_edge=table.house_edge,
    )


def player_response(player: Player) -> PlayerResponse:
    return PlayerResponse(
        player_id=player.player_id,
        name=player.name,
        gold_coins=float(player.balance.gold_coins),
        sweep_coins=float(player.balance.sweep_coins),
    )


def blackjack_response(outcome: BetOutcome | HitOutcome | SettlementOutcome) -> BlackjackResponse:
    if isinstance(outcome, BetOutcome):
        return BlackjackResponse(
            player_hand=cards_response(outcome.player_hand),
            dealer_card=card_response(outcome.dealer_card),
            player_score=outcome.player_score,
        )
    if isinstance(outcome, HitOutcome):
        return BlackjackResponse(
            hand=cards_response(outcome.hand),
            score=outcome.score,
            result="bust" if outcome.busted else None,
        )
    return BlackjackResponse(
        result=outcome.result.value,
        player_score=outcome.player_score,
        dealer_score=outcome.dealer_score,
        dealer_hand=cards_response(outcome.dealer_hand),
        bet=float(outcome.bet),
        payout=float(outcome.payout),
    )


def roulette_response(outcome: RouletteOutcome) -> RouletteResponse:
    spin = outcome.result
    return RouletteResponse(
        result=SpinResponse(
            number=spin.number,
            color=spin.color,
            is_odd=spin.is_odd,
            dozen=spin.dozen,
            column=spin.column,
        ),
        bet_results=[
            RouletteBetResultResponse(
                type=b.bet_type.value,
                amount=float(b.amount),
                is_win=b.is_win,
                payout=float(b.payout),
            )
            for b in outcome.bet_results
        ],
        total_payout=float(outcome.total_payout),
    )


def _baccarat_hand(hand: BaccaratHand) -> BaccaratHandResponse:
    return BaccaratHandResponse(
        cards=cards_response(hand.cards),
        value=hand.value,
        is_natural=hand.is_natural,
        drew_third_card=hand.drew_third_card,
    )


def baccarat_response(outcome: BaccaratOutcome) -> BaccaratResponse:
    return BaccaratResponse(
        result=BaccaratResultResponse(
            player_hand=_baccarat_hand(outcome.player_hand),
            banker_hand=_baccarat_hand(outcome.banker_hand),
            winner=outcome.winner.value,
        ),
        payout=float(outcome.payout),
        bet_type=outcome.bet_type.value,
        amount=float(outcome.amount),
    )


def outcome_response(outcome: object) -> BlackjackResponse | RouletteResponse | BaccaratResponse:
    """Pick the response shape for any game outcome."""
    if isinstance(outcome, RouletteOutcome):
        return roulette_response(outcome)
    if isinstance(outcome, BaccaratOutcome):
        return baccarat_response(outcome)
    return blackjack_response(outcome)  # type: ignore[arg-type]


def round_response(snapshot: RoundSnapshot) -> RoundStateResponse:
    upcard = snapshot.dealer_upcard
    return RoundStateResponse(
        table_id=snapshot.table_id,
        round_number=snapshot.round_number,
        stage=str(snapshot.stage),
        cards_remaining=snapshot.cards_remaining,
        dealer_upcard=card_response(upcard) if upcard is not None else None,
        hands=[
            HandStateResponse(
                player_id=h.player_id,
                cards=cards_response(h.cards),
                bet=float(h.bet),
                score=h.score,
                is_soft=h.is_soft,
                is_busted=h.is_busted,
                is_doubled=h.is_doubled,
            )
            for h in snapshot.hands
        ],
    )


def engine_state_response(state: EngineState) -> EngineStateResponse:
    return EngineStateResponse(
        status=state.status.value,
        tables=[table_response(t) for t in state.tables],
        round=round_response(state.round) if state.round is not None else None,
    )
