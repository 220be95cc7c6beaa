from factory.overflow_factory import OverflowFactory

__all__ = ["OverflowFactory"]
