"""
Relationship graph backed by Supabase tables.

Reads run with the service role client so the answers do not depend on the
caller's own row-level visibility. Every read is memoized for the lifetime of
the instance (one instance per request), and a failed read is logged and
answered as "not found", which every policy treats as a denial.
"""

import logging
from supabase import Client
from typing import Any, Dict, List, Optional, Set

from zemiguard.core.graph import RelationshipGraph
from zemiguard.modules.chats.models import CHATS_TABLE, CHAT_MEMBERS_TABLE
from zemiguard.modules.chats.schemas import ChatSnapshot
from zemiguard.modules.friendships.models import FRIENDSHIPS_TABLE
from zemiguard.modules.friendships.schemas import FriendshipStatus
from zemiguard.modules.messages.models import MESSAGES_TABLE
from zemiguard.modules.messages.schemas import MessageSnapshot
from zemiguard.modules.texter_settings.models import TEXTER_SETTINGS_TABLE
from zemiguard.modules.texter_settings.schemas import TexterSettingsSnapshot
from zemiguard.modules.users.models import USERS_TABLE, USER_COLUMNS
from zemiguard.modules.users.schemas import UserSnapshot

logger = logging.getLogger(__name__)


class SupabaseRelationshipGraph(RelationshipGraph):
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self._cache: Dict[Any, Any] = {}

    def _fetch_one(self, table: str, column: str, value: str, columns: str = "*") -> Optional[Dict[str, Any]]:
        key = ("row", table, column, value)
        if key in self._cache:
            return self._cache[key]
        try:
            result = self.supabase.table(table)\
                .select(columns)\
                .eq(column, value)\
                .limit(1)\
                .execute()
            row = result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Error reading {table} where {column}={value}: {e}")
            row = None
        self._cache[key] = row
        return row

    def get_user(self, user_id: str) -> Optional[UserSnapshot]:
        row = self._fetch_one(USERS_TABLE, "id", user_id, USER_COLUMNS)
        return UserSnapshot(**row) if row else None

    def get_chat(self, chat_id: str) -> Optional[ChatSnapshot]:
        row = self._fetch_one(CHATS_TABLE, "id", chat_id)
        return ChatSnapshot(**row) if row else None

    def get_message(self, message_id: str) -> Optional[MessageSnapshot]:
        row = self._fetch_one(MESSAGES_TABLE, "id", message_id)
        return MessageSnapshot(**row) if row else None

    def get_texter_settings(self, user_id: str) -> Optional[TexterSettingsSnapshot]:
        row = self._fetch_one(TEXTER_SETTINGS_TABLE, "user_id", user_id)
        return TexterSettingsSnapshot(**row) if row else None

    def active_chat_members(self, chat_id: str) -> List[UserSnapshot]:
        key = ("members", chat_id)
        if key in self._cache:
            return self._cache[key]
        try:
            members_result = self.supabase.table(CHAT_MEMBERS_TABLE)\
                .select("user_id")\
                .eq("chat_id", chat_id)\
                .is_("left_at", "null")\
                .execute()
            user_ids = [m["user_id"] for m in members_result.data] if members_result.data else []
            if not user_ids:
                members = []
            else:
                users_result = self.supabase.table(USERS_TABLE)\
                    .select(USER_COLUMNS)\
                    .in_("id", user_ids)\
                    .execute()
                members = [UserSnapshot(**u) for u in users_result.data] if users_result.data else []
        except Exception as e:
            logger.error(f"Error getting active members of chat {chat_id}: {e}")
            members = []
        self._cache[key] = members
        return members

    def friendship_statuses(self, user_a: str, user_b: str) -> Set[FriendshipStatus]:
        key = ("friendship", frozenset((user_a, user_b)))
        if key in self._cache:
            return self._cache[key]
        statuses = set()
        try:
            # One query per direction; rows are stored requester -> addressee
            for requester_id, addressee_id in ((user_a, user_b), (user_b, user_a)):
                result = self.supabase.table(FRIENDSHIPS_TABLE)\
                    .select("status")\
                    .eq("requester_id", requester_id)\
                    .eq("addressee_id", addressee_id)\
                    .execute()
                if result.data:
                    statuses.update(FriendshipStatus(f["status"]) for f in result.data)
        except Exception as e:
            logger.error(f"Error getting friendship between {user_a} and {user_b}: {e}")
            statuses = set()
        self._cache[key] = statuses
        return statuses
