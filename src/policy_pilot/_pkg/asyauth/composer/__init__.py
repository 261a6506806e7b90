from .base import BaseComposer
from .token import TokenComposer

__all__ = "BaseComposer", "TokenComposer"
