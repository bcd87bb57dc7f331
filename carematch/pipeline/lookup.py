"""Care recipient lookups against a profile store."""

import logging

from carematch.core.errors import ProfileStoreError
from carematch.core.schemas import CareRecipient
from carematch.stores.base import ProfileStore

logger = logging.getLogger(__name__)


async def fetch_care_recipient(store: ProfileStore, owner_id: str) -> CareRecipient | None:
    """Fetch the care recipient owned by ``owner_id``.

    Returns None when no record exists. A store failure is logged and also
    reported as None, so one failed read never aborts a ranking.
    """
    try:
        recipient = await store.get_care_recipient(owner_id)
    except ProfileStoreError:
        logger.warning(
            "Care recipient lookup failed for owner %s - scoring without it",
            owner_id,
            exc_info=True,
        )
        return None
    if recipient is None:
        logger.debug("No care recipient for owner %s", owner_id)
    return recipient

