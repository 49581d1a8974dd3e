"""
Gridfall - Event-sourced engine for a scheduled, elimination-style grid game.

Players place on a grid, spend action points to move, fire, gift and
upgrade, and vote from the grave as a jury. Turns advance on a cron
schedule. The engine provides:
- Configuration validation
- Deterministic per-event state transitions
- Replay of a submitted event log interleaved with scheduled ticks
"""

__version__ = "0.1.0"
