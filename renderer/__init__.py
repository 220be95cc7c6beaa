"""Renderers that follow a game through the situation observer protocol."""
