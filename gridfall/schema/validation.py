"""
Config Validation - Checks an initial configuration before a game exists.

Validates that:
1. Required fields are present and correctly typed
2. Player ids are unique
3. The board is at least 1x1
4. The turn interval parses as a cron expression in a known timezone
"""

from __future__ import annotations
from typing import Any

from pydantic import ValidationError

from ..engine_core.errors import InvalidConfigError
from ..engine_core.state import GameConfig
from .models import GameConfigModel, config_to_wire


def _format_error(error: dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in error["loc"])
    if not loc:
        return error["msg"]
    return f"[field: {loc}]: {error['msg']}"


def _to_wire(value: Any) -> Any:
    if isinstance(value, GameConfig):
        return config_to_wire(value)
    return value


def validate_config(value: Any) -> list[str] | None:
    """
    Validate a configuration (a GameConfig or its wire-format mapping).

    Returns the list of errors, or None when the configuration is valid.
    """
    try:
        GameConfigModel.model_validate(_to_wire(value))
    except ValidationError as e:
        return [_format_error(err) for err in e.errors()]
    return None


def load_config(value: Any) -> GameConfig:
    """
    Validate a configuration and return an independent GameConfig.

    Raises InvalidConfigError carrying the validation errors.
    """
    try:
        model = GameConfigModel.model_validate(_to_wire(value))
    except ValidationError as e:
        raise InvalidConfigError([_format_error(err) for err in e.errors()])
    return model.to_config()
