"""
Relationship Graph Accessor

Read-only questions the policies ask about rows other than the one being
decided on. Implementations: database.supabase_graph (production) and
database.memory_graph (tests, offline evaluation).
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set

from zemiguard.core.subject import Role
from zemiguard.modules.chats.schemas import ChatSnapshot
from zemiguard.modules.friendships.schemas import FriendshipStatus
from zemiguard.modules.messages.schemas import MessageSnapshot
from zemiguard.modules.texter_settings.schemas import TexterSettingsSnapshot
from zemiguard.modules.users.schemas import UserSnapshot


class RelationshipGraph(ABC):

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserSnapshot]:
        """Return the users row, or None when it does not exist"""

    @abstractmethod
    def get_chat(self, chat_id: str) -> Optional[ChatSnapshot]:
        """Return the chats row, or None when it does not exist"""

    @abstractmethod
    def get_message(self, message_id: str) -> Optional[MessageSnapshot]:
        """Return the messages row (soft-deleted rows included), or None"""

    @abstractmethod
    def get_texter_settings(self, user_id: str) -> Optional[TexterSettingsSnapshot]:
        """Return the texter_settings row for user_id, or None"""

    @abstractmethod
    def active_chat_members(self, chat_id: str) -> List[UserSnapshot]:
        """Users holding a chat_members row for chat_id with left_at null"""

    @abstractmethod
    def friendship_statuses(self, user_a: str, user_b: str) -> Set[FriendshipStatus]:
        """Statuses of every friendship row between the two users, either direction"""

    def is_active_member(self, chat_id: str, user_id: str) -> bool:
        return any(member.id == user_id for member in self.active_chat_members(chat_id))

    def chat_has_team_texter(self, chat_id: str, team_id: str) -> bool:
        """Oversight eligibility: an active Texter of team_id participates in the chat"""
        return any(
            member.role == Role.TEXTER and member.team_id == team_id
            for member in self.active_chat_members(chat_id)
        )

    def are_team_mates(self, user_a: str, user_b: str) -> bool:
        a = self.get_user(user_a)
        b = self.get_user(user_b)
        if a is None or b is None or a.team_id is None:
            return False
        return a.team_id == b.team_id

    def has_friendship(self, user_a: str, user_b: str, *statuses: FriendshipStatus) -> bool:
        found = self.friendship_statuses(user_a, user_b)
        return any(status in found for status in statuses)
