"""Game format converters for Overflow."""

from .transcript_formatter import TranscriptFormatter

__all__ = ["TranscriptFormatter"]
