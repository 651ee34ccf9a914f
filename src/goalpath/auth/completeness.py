"""Profile completeness check."""

import logging

from ..clients.base import BackendClient, BackendError
from ..db.repositories import ProfileRepository
from ..models.profile import has_first_name

logger = logging.getLogger(__name__)


async def check_profile_completion(backend: BackendClient, user_id: str) -> bool:
    """Return True when the user's profile has a non-empty first name.

    A missing row and any backend error both count as incomplete, so a failed
    lookup sends the user to the completion page.
    """
    try:
        first_name = await ProfileRepository(backend).get_first_name(user_id)
    except BackendError as e:
        logger.error("Error checking profile completion for %s: %s", user_id, e.message)
        return False
    return has_first_name(first_name)
