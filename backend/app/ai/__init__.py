"""
Dream interpretation providers.
"""
from app.ai.base import DreamInterpreter
from app.ai.factory import get_interpreter

__all__ = ["DreamInterpreter", "get_interpreter"]
