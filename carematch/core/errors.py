"""Exception types for profile lookups and ranking queries."""


class CareMatchError(Exception):
    """Base exception for the care matching engine."""


class ProfileNotFoundError(CareMatchError):
    """A subject id does not resolve to a profile of the requested role."""

    def __init__(self, profile_id: str, role: str) -> None:
        self.profile_id = profile_id
        self.role = role
        super().__init__(f"No {role} profile found with id '{profile_id}'")


class ProfileStoreError(CareMatchError):
    """The profile store could not be read (connection or query failure)."""
