"""
Base class for dream interpreters.
All providers must implement this interface so the submission flow can use
any of them without knowing which one.
"""
from abc import ABC, abstractmethod

from app.models.dream import DreamMode


class DreamInterpreter(ABC):
    """
    Abstract base class for dream interpretation providers.

    All providers must implement:
    - interpret(): Produce interpretation text for one dream
    - is_configured(): Report whether the provider can be used
    """

    name: str = "base"

    @abstractmethod
    def interpret(self, dream_text: str, mode: DreamMode) -> str:
        """
        Interpret a dream in the requested style.

        Args:
            dream_text: Trimmed, non-empty dream text
            mode: TRADITIONAL or INTERNAL

        Returns:
            Interpretation text

        Raises:
            Exception: If interpretation fails
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Check if provider is properly configured (API key present, etc.).

        Returns:
            True if provider can be used, False otherwise
        """
        pass
