"""
Sea Battle - Two-player naval battle session server.

The server pairs two connections into a session and runs the match:
- Private placement on each player's own board
- Alternating fire at the opponent's board
- Win/loss detection and rematch
"""

__version__ = "0.1.0"
