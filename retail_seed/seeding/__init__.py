"""
Seeding Module
"""
from .hashing import CredentialHasher
from .loader import PHASES, Phase, SeedContext, SeedLoader
from .profiles import DatasetProfile, ProfileName, get_profile
from .resolver import ReferenceResolver
from .summary import SeedSummary
from .upsert import NATURAL_KEYS, UpsertEngine

__all__ = [
    "CredentialHasher",
    "PHASES",
    "Phase",
    "SeedContext",
    "SeedLoader",
    "DatasetProfile",
    "ProfileName",
    "get_profile",
    "ReferenceResolver",
    "SeedSummary",
    "NATURAL_KEYS",
    "UpsertEngine",
]
