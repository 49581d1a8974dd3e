"""Wire schemas and configuration validation."""

from .models import (
    GameConfigModel,
    GameStateModel,
    EventModel,
    parse_events,
    event_to_wire,
    config_to_wire,
)
from .validation import validate_config, load_config

__all__ = [
    "GameConfigModel",
    "GameStateModel",
    "EventModel",
    "parse_events",
    "event_to_wire",
    "config_to_wire",
    "validate_config",
    "load_config",
]
