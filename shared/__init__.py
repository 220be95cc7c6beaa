"""Shared utility package for cross-layer interfaces."""

from .interfaces import IRenderer, IRendererFactory, ISituationObserver  # noqa: F401
