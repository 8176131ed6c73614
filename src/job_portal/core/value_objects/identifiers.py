"""Identifier value objects.

Identifiers are UUIDv7 strings so that they sort by creation time.
"""

from dataclasses import dataclass

from ...utils import generate_uuid_v7, is_valid_uuid


@dataclass(frozen=True)
class _Identifier:
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError(f"{self.__class__.__name__} must be a non-empty string")
        if not is_valid_uuid(self.value):
            raise ValueError(f"{self.__class__.__name__} must be a valid UUID, got: {self.value}")

    @classmethod
    def generate(cls):
        """Generate a new time-ordered identifier."""
        return cls(generate_uuid_v7())

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return isinstance(value, str) and is_valid_uuid(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserId(_Identifier):
    """User identifier."""


@dataclass(frozen=True)
class JobId(_Identifier):
    """Job posting identifier."""


@dataclass(frozen=True)
class ApplicationId(_Identifier):
    """Job application identifier."""


@dataclass(frozen=True)
class ResumeId(_Identifier):
    """Resume identifier."""
