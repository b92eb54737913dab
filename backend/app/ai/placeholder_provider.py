"""
Placeholder interpreter used until a text-generation service is connected.
Returns one fixed text per mode and ignores the dream itself.
"""
from app.ai.base import DreamInterpreter
from app.models.dream import DreamMode

TRADITIONAL_PLACEHOLDER = "TEST: The traditional interpretation will appear here soon."
INTERNAL_PLACEHOLDER = "TEST: The internal reflective interpretation will appear here soon."


class PlaceholderInterpreter(DreamInterpreter):
    """Fixed-text interpreter."""

    name = "placeholder"

    def interpret(self, dream_text: str, mode: DreamMode) -> str:
        if mode == DreamMode.INTERNAL:
            return INTERNAL_PLACEHOLDER
        return TRADITIONAL_PLACEHOLDER

    def is_configured(self) -> bool:
        return True
