"""
Interpreter factory.
Selects and returns the interpreter configured by INTERPRETATION_PROVIDER.
"""
import logging
from app.config import settings
from app.ai.base import DreamInterpreter
from app.ai.placeholder_provider import PlaceholderInterpreter

logger = logging.getLogger(__name__)

PROVIDERS = {
    PlaceholderInterpreter.name: PlaceholderInterpreter,
}


def get_interpreter() -> DreamInterpreter:
    """
    Factory function to get the configured interpreter.

    Provider selection is controlled by INTERPRETATION_PROVIDER:
    - "placeholder" → PlaceholderInterpreter (default)

    Raises:
        ValueError: If provider is unknown or misconfigured
    """
    provider_name = (settings.interpretation_provider or "placeholder").lower()

    provider_class = PROVIDERS.get(provider_name)
    if provider_class is None:
        logger.error(f"Unknown interpretation provider: {provider_name}")
        raise ValueError(
            f"Invalid interpretation provider: {provider_name}. "
            f"Must be one of: {', '.join(repr(name) for name in PROVIDERS)}"
        )

    provider = provider_class()
    if not provider.is_configured():
        raise ValueError(f"Interpretation provider '{provider_name}' is not configured.")
    return provider
