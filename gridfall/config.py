"""
Runtime settings read from the environment.

GRIDFALL_RULE_MODE  compatible | corrected (default: compatible)
GRIDFALL_LOG_LEVEL  level name for the CLI's logging setup (default: WARNING)
"""

import os

GRIDFALL_RULE_MODE = os.getenv("GRIDFALL_RULE_MODE", "compatible")
GRIDFALL_LOG_LEVEL = os.getenv("GRIDFALL_LOG_LEVEL", "WARNING")
