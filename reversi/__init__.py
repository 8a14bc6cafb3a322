"""Reversi/Othello rule engine, AI opponents and game service."""

__version__ = "1.0.0"
