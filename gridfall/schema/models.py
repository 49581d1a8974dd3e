"""
Pydantic Schemas - The JSON shape of configurations, events and states.

Field names follow the wire format existing clients already send
(submittedAt, turnIntervalTZ, locRow, ...); Python code can use either
the alias or the field name when building models.

Instants are serialized as millisecond UTC strings (see utils.time).
"""

from dataclasses import fields
from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_serializer,
    field_validator,
    model_validator,
)

from ..engine_core.events import (
    FireEvent,
    GameEvent,
    GiftAPEvent,
    GiftHPEvent,
    MoveEvent,
    PlaceEvent,
    TickEvent,
    UpgradeEvent,
    VoteEvent,
)
from ..engine_core.schedule import build_trigger
from ..engine_core.state import (
    STARTING_AP,
    STARTING_HP,
    BoardDimensions,
    GameConfig,
    GameState,
    Player,
)
from ..utils.time import to_iso


# =============================================================================
# Configuration
# =============================================================================

class PlayerModel(BaseModel):
    id: StrictStr


class DimensionsModel(BaseModel):
    height: StrictInt = Field(ge=1)
    width: StrictInt = Field(ge=1)


class GameConfigModel(BaseModel):
    """Game configuration as submitted by a client."""
    model_config = ConfigDict(populate_by_name=True)

    players: list[PlayerModel]
    dimensions: DimensionsModel
    start_at: AwareDatetime = Field(alias="startAt")
    turn_interval: StrictStr = Field(alias="turnInterval", description="5-field cron expression")
    turn_interval_tz: StrictStr = Field(alias="turnIntervalTZ", description="IANA timezone name")
    starting_ap: StrictInt = Field(default=STARTING_AP, ge=0, alias="startingAP")
    starting_hp: StrictInt = Field(default=STARTING_HP, ge=0, alias="startingHP")

    @field_validator("players")
    @classmethod
    def _unique_player_ids(cls, players: list[PlayerModel]) -> list[PlayerModel]:
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError("player ids must be unique")
        return players

    @field_validator("turn_interval_tz")
    @classmethod
    def _known_timezone(cls, tz: str) -> str:
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {tz}")
        return tz

    @model_validator(mode="after")
    def _parsable_schedule(self) -> "GameConfigModel":
        try:
            trigger = build_trigger(self.turn_interval, self.turn_interval_tz)
        except (ValueError, LookupError) as e:
            raise ValueError(f"invalid turn interval: {e}")
        if trigger.get_next_fire_time(None, self.start_at) is None:
            raise ValueError("invalid turn interval: schedule never fires")
        return self

    @field_serializer("start_at")
    def _serialize_start_at(self, value: datetime) -> str:
        return to_iso(value)

    def to_config(self) -> GameConfig:
        return GameConfig(
            players=[Player(id=p.id) for p in self.players],
            dimensions=BoardDimensions(
                height=self.dimensions.height,
                width=self.dimensions.width,
            ),
            start_at=self.start_at,
            turn_interval=self.turn_interval,
            turn_interval_tz=self.turn_interval_tz,
            starting_ap=self.starting_ap,
            starting_hp=self.starting_hp,
        )


def config_to_wire(config: GameConfig) -> dict[str, Any]:
    """Convert a GameConfig back to its wire dict (unvalidated)."""
    return {
        "players": [{"id": p.id} for p in config.players],
        "dimensions": {
            "height": config.dimensions.height,
            "width": config.dimensions.width,
        },
        "startAt": config.start_at,
        "turnInterval": config.turn_interval,
        "turnIntervalTZ": config.turn_interval_tz,
        "startingAP": config.starting_ap,
        "startingHP": config.starting_hp,
    }


# =============================================================================
# Events
# =============================================================================

class _EventModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    submitted_at: AwareDatetime = Field(alias="submittedAt")


class TickEventModel(_EventModel):
    type: Literal["TICK"]

    def to_event(self) -> TickEvent:
        return TickEvent(submitted_at=self.submitted_at)


class PlaceEventModel(_EventModel):
    type: Literal["PLACE"]
    player: StrictInt
    row: StrictInt
    col: StrictInt

    def to_event(self) -> PlaceEvent:
        return PlaceEvent(self.submitted_at, self.player, self.row, self.col)


class MoveEventModel(_EventModel):
    type: Literal["MOVE"]
    player: StrictInt
    direction: StrictStr = Field(alias="dir", description="UP, DOWN, LEFT or RIGHT")

    def to_event(self) -> MoveEvent:
        return MoveEvent(self.submitted_at, self.player, self.direction)


class FireEventModel(_EventModel):
    type: Literal["FIRE"]
    player: StrictInt
    target: StrictInt

    def to_event(self) -> FireEvent:
        return FireEvent(self.submitted_at, self.player, self.target)


class VoteEventModel(_EventModel):
    type: Literal["VOTE"]
    player: StrictInt
    target: StrictInt

    def to_event(self) -> VoteEvent:
        return VoteEvent(self.submitted_at, self.player, self.target)


class GiftAPEventModel(_EventModel):
    type: Literal["GIFT_AP"]
    player: StrictInt
    target: StrictInt

    def to_event(self) -> GiftAPEvent:
        return GiftAPEvent(self.submitted_at, self.player, self.target)


class GiftHPEventModel(_EventModel):
    type: Literal["GIFT_HP"]
    player: StrictInt
    target: StrictInt

    def to_event(self) -> GiftHPEvent:
        return GiftHPEvent(self.submitted_at, self.player, self.target)


class UpgradeEventModel(_EventModel):
    type: Literal["UPGRADE"]
    player: StrictInt

    def to_event(self) -> UpgradeEvent:
        return UpgradeEvent(self.submitted_at, self.player)


EventModel = Annotated[
    Union[
        TickEventModel,
        PlaceEventModel,
        MoveEventModel,
        FireEventModel,
        VoteEventModel,
        GiftAPEventModel,
        GiftHPEventModel,
        UpgradeEventModel,
    ],
    Field(discriminator="type"),
]

_event_list_adapter = TypeAdapter(list[EventModel])


def parse_events(data: Any) -> list[GameEvent]:
    """
    Parse a list of wire-format events.

    Raises pydantic.ValidationError on malformed input.
    """
    return [model.to_event() for model in _event_list_adapter.validate_python(data)]


def event_to_wire(event: GameEvent) -> dict[str, Any]:
    data: dict[str, Any] = {
        "type": event.event_type.value,
        "submittedAt": to_iso(event.submitted_at),
    }
    for f in fields(event):
        if f.name == "submitted_at":
            continue
        value = getattr(event, f.name)
        if f.name == "direction":
            data["dir"] = getattr(value, "value", value)
        else:
            data[f.name] = value
    return data


# =============================================================================
# State
# =============================================================================

class PlayerStateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    placed: bool
    alive: bool
    disqualified: bool
    row: int = Field(alias="locRow")
    col: int = Field(alias="locCol")
    range: int
    ap: int
    hp: int


class GameStateModel(BaseModel):
    """Read-only view of a game state for clients."""
    model_config = ConfigDict(populate_by_name=True)

    config: GameConfigModel
    player_states: list[PlayerStateModel] = Field(alias="playerStates")
    board: list[list[Optional[int]]] = Field(alias="boardState")
    votes: list[Optional[int]]
    winner: Optional[int] = None

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        return cls(
            config=GameConfigModel.model_validate(config_to_wire(state.config)),
            player_states=[
                PlayerStateModel(
                    placed=ps.placed,
                    alive=ps.alive,
                    disqualified=ps.disqualified,
                    row=ps.row,
                    col=ps.col,
                    range=ps.range,
                    ap=ps.ap,
                    hp=ps.hp,
                )
                for ps in state.player_states
            ],
            board=[list(row) for row in state.board],
            votes=list(state.votes),
            winner=state.winner,
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
