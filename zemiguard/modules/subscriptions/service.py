import logging
from postgrest.exceptions import APIError
from supabase import Client
from typing import Optional

from zemiguard.core.errors import UniquenessViolation
from zemiguard.modules.subscriptions.models import MANUAL_SUBSCRIPTIONS_TABLE, UNIQUE_VIOLATION_CODE
from zemiguard.modules.subscriptions.schemas import ManualSubscriptionGrant, ManualSubscriptionSnapshot

logger = logging.getLogger(__name__)


class ManualSubscriptionService:
    """Storage executor for manual subscription grants. Expects the service role client."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_for_user(self, user_id: str) -> Optional[ManualSubscriptionSnapshot]:
        result = self.supabase.table(MANUAL_SUBSCRIPTIONS_TABLE)\
            .select("*")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return ManualSubscriptionSnapshot(**result.data[0])

    def grant(self, grant: ManualSubscriptionGrant) -> ManualSubscriptionSnapshot:
        """Insert the one live grant for a user; a second grant is a UniquenessViolation"""
        payload = grant.model_dump(mode="json", exclude_none=True)
        try:
            result = self.supabase.table(MANUAL_SUBSCRIPTIONS_TABLE)\
                .insert(payload)\
                .execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION_CODE:
                logger.info(f"Manual subscription already exists for user {grant.user_id}")
                raise UniquenessViolation(f"User {grant.user_id} already has a manual subscription")
            logger.error(f"Failed to grant manual subscription to {grant.user_id}: {e.message}")
            raise

        if not result.data:
            raise RuntimeError(f"Manual subscription insert for {grant.user_id} returned no row")
        logger.info(f"Granted {grant.plan_type} manual subscription to user {grant.user_id}")
        return ManualSubscriptionSnapshot(**result.data[0])

    def revoke(self, user_id: str) -> bool:
        result = self.supabase.table(MANUAL_SUBSCRIPTIONS_TABLE)\
            .delete()\
            .eq("user_id", user_id)\
            .execute()
        revoked = bool(result.data)
        if revoked:
            logger.info(f"Revoked manual subscription of user {user_id}")
        return revoked
