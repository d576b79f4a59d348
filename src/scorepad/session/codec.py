"""Conversion between GameState and the persisted JSON layout.

Each game has its own layout, kept compatible with sessions written by earlier
versions of the app:

- amerikaans-jokeren: {players: [{id, name, color, scores: [{id, round, value,
  isWinner}]}], currentRound, settings: {endCondition, maxRounds, maxPoints},
  gameEnded}
- tienduizend: {players: [{id, name, color, score, history: [{id, value,
  type}]}], currentPlayerIndex}

Reading is lenient about missing keys, but a document that does not fit the
layout raises ValidationError (a ValueError).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scorepad.logic.enums import PLAYER_PALETTE, EndCondition, EntryKind, PlayerColor, TurnPolicy
from scorepad.logic.ids import IdFactory, new_id
from scorepad.logic.roster import DEFAULT_NAME_PREFIX
from scorepad.logic.rules import GameRules
from scorepad.logic.state import (
    DEFAULT_MAX_POINTS,
    DEFAULT_MAX_ROUNDS,
    GameState,
    Ledger,
    LedgerEntry,
    Player,
    SessionConfig,
)
from scorepad.logic.state_utils import mark_game_ended
from scorepad.logic.win import evaluate_game_end

_HistoryType = Literal["add", "subtract", "farkle"]


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _none_as_zero(value: object) -> object:
    # unparseable keypad input was persisted as null
    return 0 if value is None else value


class JokerenScoreRecord(_Record):
    id: str | None = None
    round: int = 1
    value: int = 0
    is_winner: bool = Field(default=False, alias="isWinner")

    coerce_value = field_validator("value", mode="before")(_none_as_zero)


class JokerenPlayerRecord(_Record):
    id: str
    name: str = ""
    color: str = ""
    scores: list[JokerenScoreRecord] = Field(default_factory=list)


class JokerenSettingsRecord(_Record):
    end_condition: EndCondition = Field(default=EndCondition.NONE, alias="endCondition")
    max_rounds: int = Field(default=DEFAULT_MAX_ROUNDS, alias="maxRounds")
    max_points: int = Field(default=DEFAULT_MAX_POINTS, alias="maxPoints")


class JokerenSessionRecord(_Record):
    players: list[JokerenPlayerRecord] = Field(default_factory=list)
    current_round: int = Field(default=1, alias="currentRound")
    settings: JokerenSettingsRecord = Field(default_factory=JokerenSettingsRecord)
    game_ended: bool = Field(default=False, alias="gameEnded")


class TienduizendHistoryRecord(_Record):
    id: str | None = None
    value: int = 0
    type: _HistoryType = "add"

    coerce_value = field_validator("value", mode="before")(_none_as_zero)


class TienduizendPlayerRecord(_Record):
    id: str
    name: str = ""
    color: str = ""
    score: int = 0
    history: list[TienduizendHistoryRecord] = Field(default_factory=list)


class TienduizendSessionRecord(_Record):
    players: list[TienduizendPlayerRecord] = Field(default_factory=list)
    current_player_index: int = Field(default=0, alias="currentPlayerIndex")


def _color_for(raw: str, position: int) -> PlayerColor:
    try:
        return PlayerColor(raw)
    except ValueError:
        return PLAYER_PALETTE[position % len(PLAYER_PALETTE)]


def _name_for(raw: str) -> str:
    return raw.strip() or DEFAULT_NAME_PREFIX


# --- amerikaans-jokeren ---


def _encode_jokeren(state: GameState) -> JokerenSessionRecord:
    return JokerenSessionRecord(
        players=[
            JokerenPlayerRecord(
                id=player.id,
                name=player.name,
                color=player.color.value,
                scores=[
                    JokerenScoreRecord(
                        id=entry.id,
                        round=entry.sequence,
                        value=entry.amount,
                        is_winner=entry.kind == EntryKind.ROUND_WINNER_ZERO,
                    )
                    for entry in player.ledger.entries
                ],
            )
            for player in state.players
        ],
        current_round=state.current_round,
        settings=JokerenSettingsRecord(
            end_condition=state.config.end_condition,
            max_rounds=state.config.max_rounds,
            max_points=state.config.max_points,
        ),
        game_ended=state.game_ended,
    )


def _decode_jokeren(record: JokerenSessionRecord, rules: GameRules, id_factory: IdFactory) -> GameState:
    players = tuple(
        Player(
            id=player.id,
            name=_name_for(player.name),
            color=_color_for(player.color, position),
            ledger=Ledger(
                entries=tuple(
                    LedgerEntry(
                        id=score.id or id_factory(),
                        sequence=score.round,
                        amount=0 if score.is_winner else score.value,
                        kind=EntryKind.ROUND_WINNER_ZERO if score.is_winner else EntryKind.NORMAL,
                    )
                    for score in player.scores
                )
            ),
        )
        for position, player in enumerate(record.players)
    )
    return GameState(
        variant=rules.variant,
        players=players,
        current_round=max(1, record.current_round),
        config=SessionConfig(
            end_condition=record.settings.end_condition,
            max_rounds=record.settings.max_rounds,
            max_points=record.settings.max_points,
        ),
        game_ended=record.game_ended,
    )


# --- tienduizend ---


def _encode_tienduizend(state: GameState) -> TienduizendSessionRecord:
    return TienduizendSessionRecord(
        players=[
            TienduizendPlayerRecord(
                id=player.id,
                name=player.name,
                color=player.color.value,
                score=player.total,
                history=[
                    TienduizendHistoryRecord(
                        id=entry.id,
                        value=entry.amount,
                        type="farkle" if entry.kind == EntryKind.BUST else "add",
                    )
                    for entry in player.ledger.entries
                ],
            )
            for player in state.players
        ],
        current_player_index=state.active_index,
    )


def _decode_history_entry(item: TienduizendHistoryRecord, sequence: int, id_factory: IdFactory) -> LedgerEntry:
    # "subtract" entries come from the older non-ledger app and already carry a negative value
    kind = EntryKind.BUST if item.type == "farkle" else EntryKind.NORMAL
    return LedgerEntry(
        id=item.id or id_factory(),
        sequence=sequence,
        amount=0 if kind == EntryKind.BUST else item.value,
        kind=kind,
    )


def _decode_tienduizend(record: TienduizendSessionRecord, rules: GameRules, id_factory: IdFactory) -> GameState:
    players = tuple(
        Player(
            id=player.id,
            name=_name_for(player.name),
            color=_color_for(player.color, position),
            ledger=Ledger(
                entries=tuple(
                    _decode_history_entry(item, sequence, id_factory)
                    for sequence, item in enumerate(player.history, start=1)
                )
            ),
        )
        for position, player in enumerate(record.players)
    )
    active_index = record.current_player_index
    if not 0 <= active_index < len(players):
        active_index = 0
    state = GameState(variant=rules.variant, players=players, active_index=active_index)

    # the end of a race game is not stored; derive it from the totals
    outcome = evaluate_game_end(state, rules)
    if outcome.ended:
        state = mark_game_ended(state, winner_id=outcome.winner.id if outcome.winner else None)
    return state


def encode_session(state: GameState, rules: GameRules) -> str:
    """Serialize the session to the persisted JSON text for its game."""
    if rules.turn_policy == TurnPolicy.ROUND:
        record: _Record = _encode_jokeren(state)
    else:
        record = _encode_tienduizend(state)
    return record.model_dump_json(by_alias=True)


def decode_session(content: str, rules: GameRules, id_factory: IdFactory = new_id) -> GameState:
    """
    Parse persisted JSON text into a GameState.

    Raises:
        ValueError: If the text is not JSON or does not fit the layout
            (pydantic's ValidationError is a ValueError)

    """
    if rules.turn_policy == TurnPolicy.ROUND:
        return _decode_jokeren(JokerenSessionRecord.model_validate_json(content), rules, id_factory)
    return _decode_tienduizend(TienduizendSessionRecord.model_validate_json(content), rules, id_factory)
