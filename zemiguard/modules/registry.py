"""
Policy registry: one strategy instance per resource family in RESOURCE_FAMILIES
"""

from typing import Dict

from zemiguard.core.policy import ResourcePolicy
from zemiguard.modules.call_logs.policy import CallLogPolicy
from zemiguard.modules.chats.policy import ChatMemberPolicy, ChatPolicy
from zemiguard.modules.devices.policy import PushTokenPolicy, UserSessionPolicy
from zemiguard.modules.friendships.policy import DeniedFriendRequestPolicy, FriendshipPolicy
from zemiguard.modules.messages.policy import (
    MessageEditPolicy,
    MessagePolicy,
    MessageReactionPolicy,
    MessageReadReceiptPolicy,
    StarredMessagePolicy,
)
from zemiguard.modules.quick_messages.policy import QuickMessagePolicy
from zemiguard.modules.reports.policy import ReportPolicy
from zemiguard.modules.sos_alerts.policy import SOSAlertPolicy
from zemiguard.modules.subscriptions.policy import ManualSubscriptionPolicy
from zemiguard.modules.teams.policy import TeamPolicy
from zemiguard.modules.texter_settings.policy import TexterSettingsPolicy
from zemiguard.modules.users.policy import UserPolicy

POLICY_CLASSES = [
    TeamPolicy,
    UserPolicy,
    ChatPolicy,
    ChatMemberPolicy,
    MessagePolicy,
    MessageEditPolicy,
    MessageReactionPolicy,
    StarredMessagePolicy,
    MessageReadReceiptPolicy,
    FriendshipPolicy,
    DeniedFriendRequestPolicy,
    QuickMessagePolicy,
    TexterSettingsPolicy,
    SOSAlertPolicy,
    ReportPolicy,
    CallLogPolicy,
    ManualSubscriptionPolicy,
    PushTokenPolicy,
    UserSessionPolicy,
]


def default_policies() -> Dict[str, ResourcePolicy]:
    return {policy_class.resource_type: policy_class() for policy_class in POLICY_CLASSES}
