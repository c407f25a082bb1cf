"""
Timecards - Chronology Card Game Engine

A deterministic, rules-driven engine for a turn-based timeline card game.
Players hold historical-event cards with a concealed year and insert them
into a shared, growing timeline. The engine provides:
- Deal primitives (shuffle, draw, hand management)
- An immutable game state machine
- An interaction adapter for drag and tap input modes
- An event catalog loader and an HTTP surface for presentation clients
"""

__version__ = "0.1.0"
