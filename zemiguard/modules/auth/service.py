import hashlib
import logging
import time
from fastapi import HTTPException
from supabase import Client
from typing import Any, Dict

from zemiguard.core.subject import Subject
from zemiguard.modules.users.models import USERS_TABLE, USER_COLUMNS

logger = logging.getLogger(__name__)

# In-memory cache for auth lookups to reduce Supabase auth calls (many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500

# app_metadata.type marking the administrative identity; set server-side only
SERVICE_ACCOUNT_TYPE = "service"


def _evict_expired(now: float):
    for key in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]:
        del _AUTH_USER_CACHE[key]


class IdentityService:
    def __init__(self, supabase: Client, service_supabase: Client):
        self.supabase = supabase
        self.service_supabase = service_supabase

    def get_auth_user(self, token: str) -> Dict[str, Any]:
        """Get the Supabase Auth user for a token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
                _evict_expired(now)
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            logger.info(f"Token rejected by Supabase Auth: {error_msg}")
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def resolve_subject(self, token: str) -> Subject:
        """Resolve a bearer token into the Subject decisions are taken for"""
        user_data = self.get_auth_user(token)
        if user_data["app_metadata"].get("type") == SERVICE_ACCOUNT_TYPE:
            return Subject.service(user_data["id"])

        try:
            result = self.service_supabase.table(USERS_TABLE)\
                .select(USER_COLUMNS)\
                .eq("id", user_data["id"])\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading user profile {user_data['id']}: {e}")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not result.data:
            raise HTTPException(status_code=401, detail="User profile not found")
        return Subject.from_user(result.data[0])


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()
