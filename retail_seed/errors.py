"""
Retail Seed Errors

Every error is fatal to the run; nothing in the pipeline retries.
"""

from typing import Any, Dict, Optional


class SeedError(Exception):
    """Base class for seeding failures"""
    pass


class HashFailure(SeedError):
    """Hashing a user secret failed"""
    pass


class PrerequisiteNotFoundError(SeedError):
    """A row an earlier phase should have created could not be found"""

    def __init__(self, entity: str, key: Dict[str, Any], phase: Optional[str] = None):
        self.entity = entity
        self.key = dict(key)
        self.phase = phase
        details = ", ".join(f"{k}={v!r}" for k, v in self.key.items())
        message = f"Prerequisite not found: {entity} ({details})"
        if phase:
            message = f"{message} while seeding {phase}"
        super().__init__(message)


class GatewayFailure(SeedError):
    """The datastore rejected a read or write"""

    def __init__(self, operation: str, entity: str, cause: Exception):
        self.operation = operation
        self.entity = entity
        self.cause = cause
        super().__init__(f"{operation} on {entity} failed: {cause}")


class UnknownProfileError(SeedError, ValueError):
    """Requested dataset profile does not exist"""
    pass
