from .review import ReviewFlow

__all__ = ["ReviewFlow"]
