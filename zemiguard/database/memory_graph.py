"""
In-memory relationship graph for tests and offline evaluation (batch script)
"""

from typing import Dict, List, Optional, Set, Tuple

from zemiguard.core.graph import RelationshipGraph
from zemiguard.modules.chats.schemas import ChatMemberSnapshot, ChatSnapshot
from zemiguard.modules.friendships.schemas import FriendshipSnapshot, FriendshipStatus
from zemiguard.modules.messages.schemas import MessageSnapshot
from zemiguard.modules.texter_settings.schemas import TexterSettingsSnapshot
from zemiguard.modules.users.schemas import UserSnapshot


class InMemoryRelationshipGraph(RelationshipGraph):
    def __init__(self):
        self.users: Dict[str, UserSnapshot] = {}
        self.chats: Dict[str, ChatSnapshot] = {}
        self.members: Dict[Tuple[str, str], ChatMemberSnapshot] = {}
        self.messages: Dict[str, MessageSnapshot] = {}
        self.friendships: List[FriendshipSnapshot] = []
        self.texter_settings: Dict[str, TexterSettingsSnapshot] = {}

    def add_user(self, **fields) -> UserSnapshot:
        user = UserSnapshot(**fields)
        self.users[user.id] = user
        return user

    def add_chat(self, **fields) -> ChatSnapshot:
        chat = ChatSnapshot(**fields)
        self.chats[chat.id] = chat
        return chat

    def add_member(self, chat_id: str, user_id: str, **fields) -> ChatMemberSnapshot:
        member = ChatMemberSnapshot(chat_id=chat_id, user_id=user_id, **fields)
        self.members[(chat_id, user_id)] = member
        return member

    def add_message(self, **fields) -> MessageSnapshot:
        message = MessageSnapshot(**fields)
        self.messages[message.id] = message
        return message

    def add_friendship(self, **fields) -> FriendshipSnapshot:
        friendship = FriendshipSnapshot(**fields)
        self.friendships.append(friendship)
        return friendship

    def add_texter_settings(self, **fields) -> TexterSettingsSnapshot:
        texter_settings = TexterSettingsSnapshot(**fields)
        self.texter_settings[texter_settings.user_id] = texter_settings
        return texter_settings

    def get_user(self, user_id: str) -> Optional[UserSnapshot]:
        return self.users.get(user_id)

    def get_chat(self, chat_id: str) -> Optional[ChatSnapshot]:
        return self.chats.get(chat_id)

    def get_message(self, message_id: str) -> Optional[MessageSnapshot]:
        return self.messages.get(message_id)

    def get_texter_settings(self, user_id: str) -> Optional[TexterSettingsSnapshot]:
        return self.texter_settings.get(user_id)

    def active_chat_members(self, chat_id: str) -> List[UserSnapshot]:
        return [
            self.users[member.user_id]
            for (member_chat_id, _), member in self.members.items()
            if member_chat_id == chat_id and member.is_active and member.user_id in self.users
        ]

    def friendship_statuses(self, user_a: str, user_b: str) -> Set[FriendshipStatus]:
        return {
            f.status for f in self.friendships
            if {f.requester_id, f.addressee_id} == {user_a, user_b}
        }

    @classmethod
    def from_world(cls, world: Dict[str, list]) -> "InMemoryRelationshipGraph":
        """Build a graph from table-named row lists, e.g. a JSON fixture file"""
        graph = cls()
        for row in world.get("users", []):
            graph.add_user(**row)
        for row in world.get("chats", []):
            graph.add_chat(**row)
        for row in world.get("chat_members", []):
            graph.add_member(**row)
        for row in world.get("messages", []):
            graph.add_message(**row)
        for row in world.get("friendships", []):
            graph.add_friendship(**row)
        for row in world.get("texter_settings", []):
            graph.add_texter_settings(**row)
        return graph
