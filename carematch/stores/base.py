"""Abstract base class for profile stores."""

from abc import ABC, abstractmethod

from carematch.core.schemas import CareRecipient, Family, Professional


class ProfileStore(ABC):
    """Read access to family, professional, and care recipient profiles.

    Lookups return None for a missing record. Implementations raise
    ProfileStoreError when the backend cannot be reached or a read fails.
    """

    @property
    @abstractmethod
    def store_id(self) -> str:
        """Identifier for this backend (e.g. 'sqlite')."""

    @abstractmethod
    async def get_family(self, family_id: str) -> Family | None:
        """Return the family-role profile with this id."""

    @abstractmethod
    async def get_professional(self, professional_id: str) -> Professional | None:
        """Return the professional-role profile with this id."""

    @abstractmethod
    async def list_families(self) -> list[Family]:
        """Return every family-role profile (no pagination)."""

    @abstractmethod
    async def list_professionals(self) -> list[Professional]:
        """Return every professional-role profile (no pagination)."""

    @abstractmethod
    async def get_care_recipient(self, user_id: str) -> CareRecipient | None:
        """Return the care recipient owned by ``user_id``."""

    @abstractmethod
    async def list_care_recipients(self) -> list[CareRecipient]:
        """Return every care recipient profile."""
