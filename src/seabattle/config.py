"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that a player
can move their board to another port or stretch the peer deadlines on a slow
network without touching the code, while the automated test-suite can pin
ephemeral ports.
"""

from __future__ import annotations

import os


# ===========================================================================
# Network Defaults
# ===========================================================================
# SEABATTLE_HOST: Address the local board server binds to.
#   Defaults to "127.0.0.1". Use 0.0.0.0 to play across machines.
#   Example: export SEABATTLE_HOST=0.0.0.0
DEFAULT_HOST: str = os.getenv("SEABATTLE_HOST", "127.0.0.1")

# SEABATTLE_PORT: Port the local board server listens on.
#   Defaults to 8080.
#   Example: export SEABATTLE_PORT=8081
DEFAULT_PORT: int = int(os.getenv("SEABATTLE_PORT", "8080"))

# SEABATTLE_PEER_HOST / SEABATTLE_PEER_PORT: Where the opponent's board server lives.
#   Defaults to the same host on port 8081 so two terminals on one machine work out of the box.
DEFAULT_PEER_HOST: str = os.getenv("SEABATTLE_PEER_HOST", "127.0.0.1")
DEFAULT_PEER_PORT: int = int(os.getenv("SEABATTLE_PEER_PORT", "8081"))


# ===========================================================================
# Peer Call Deadlines
# ===========================================================================
# SEABATTLE_BOARD_TIMEOUT: seconds allowed for fetching the opponent's board (advisory call).
#   Defaults to 2 seconds.
BOARD_TIMEOUT: float = float(os.getenv("SEABATTLE_BOARD_TIMEOUT", "2"))

# SEABATTLE_HIT_TIMEOUT: seconds allowed for submitting a shot and the alive-boat follow-up.
#   Defaults to 5 seconds. Keep it above BOARD_TIMEOUT, a shot blocks gameplay.
HIT_TIMEOUT: float = float(os.getenv("SEABATTLE_HIT_TIMEOUT", "5"))


# ===========================================================================
# Game Constants
# ===========================================================================
# Width and height of the grid. Fixed: labels only cover columns A..J.
BOARD_SIZE: int = 10

# Standard fleet: list of (name, size) tuples. Index in this list is the boat id.
FLEET = [
    ("Carrier", 5),
    ("Battleship", 4),
    ("Cruiser", 3),
    ("Submarine", 3),
    ("Destroyer", 2),
]

# SEABATTLE_CHALLENGE: Sentence shown to the opponent under your board.
CHALLENGE: str = os.getenv("SEABATTLE_CHALLENGE", "Come and get me!")


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# SEABATTLE_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled).
#   Example: export SEABATTLE_DEBUG=1
DEBUG: bool = os.getenv("SEABATTLE_DEBUG", "0") == "1"
