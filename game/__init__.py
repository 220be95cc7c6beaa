"""Overflow game rules: board, situation, game and players."""
