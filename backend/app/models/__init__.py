"""
Database models package.
"""
from app.models.base import Base
from app.models.anon_usage import AnonUsage
from app.models.profile import Profile
from app.models.dream import Dream, DreamMode

__all__ = [
    "Base",
    "AnonUsage",
    "Profile",
    "Dream",
    "DreamMode",
]
