"""
Engine errors.

Every rule violation surfaces as a GameRuleError subclass. Failures are
local to the event being applied: nothing catches them inside the engine,
so a failing event aborts the whole replay that hit it.
"""


class GameRuleError(ValueError):
    """Base class for all engine failures."""


class InvalidConfigError(GameRuleError):
    """Raised when the initial configuration fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("invalid player input")


class GameCompleteError(GameRuleError):
    """Raised when an event is applied to a game that already has a winner."""


class GameNotStartedError(GameRuleError):
    """Raised when an event is submitted at or before the game start."""


class InvalidEventError(GameRuleError):
    """Raised when an event fails its per-action preconditions."""


class RetroactiveEventError(GameRuleError):
    """Raised when appended events would rewrite an already replayed timeline."""
