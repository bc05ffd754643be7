"""
Resource Families Configuration
This config defines every resource family the gateway can decide on, the table
backing it and the operations a policy exists for.
Operations missing from a family are denied before any policy runs.
"""

from zemiguard.modules.call_logs.models import CALL_LOGS_TABLE
from zemiguard.modules.chats.models import CHATS_TABLE, CHAT_MEMBERS_TABLE
from zemiguard.modules.devices.models import PUSH_TOKENS_TABLE, USER_SESSIONS_TABLE
from zemiguard.modules.friendships.models import DENIED_FRIEND_REQUESTS_TABLE, FRIENDSHIPS_TABLE
from zemiguard.modules.messages.models import (
    MESSAGE_EDITS_TABLE,
    MESSAGE_REACTIONS_TABLE,
    MESSAGE_READ_RECEIPTS_TABLE,
    MESSAGES_TABLE,
    STARRED_MESSAGES_TABLE,
)
from zemiguard.modules.quick_messages.models import QUICK_MESSAGES_TABLE
from zemiguard.modules.reports.models import REPORTS_TABLE
from zemiguard.modules.sos_alerts.models import SOS_ALERTS_TABLE
from zemiguard.modules.subscriptions.models import MANUAL_SUBSCRIPTIONS_TABLE
from zemiguard.modules.teams.models import TEAMS_TABLE
from zemiguard.modules.texter_settings.models import TEXTER_SETTINGS_TABLE
from zemiguard.modules.users.models import USERS_TABLE

# Define resource families and their defined operations
RESOURCE_FAMILIES = {
    "team": {
        "table": TEAMS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Team created at signup, mutated only by its Owner"
    },
    "user": {
        "table": USERS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "User identity rows and administrative activation"
    },
    "chat": {
        "table": CHATS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Chats, visible to members and oversight Owners"
    },
    "chat_member": {
        "table": CHAT_MEMBERS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Chat membership and per-member mute/pin settings"
    },
    "message": {
        "table": MESSAGES_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Chat messages with edit and soft-delete"
    },
    "message_edit": {
        "table": MESSAGE_EDITS_TABLE,
        "operations": ["select", "insert", "update", "delete"],
        "description": "Append-only message edit history"
    },
    "message_reaction": {
        "table": MESSAGE_REACTIONS_TABLE,
        "operations": ["select", "insert", "delete"],
        "description": "Emoji reactions on messages"
    },
    "starred_message": {
        "table": STARRED_MESSAGES_TABLE,
        "operations": ["select", "insert", "delete"],
        "description": "Personal starred messages"
    },
    "message_read_receipt": {
        "table": MESSAGE_READ_RECEIPTS_TABLE,
        "operations": ["select", "insert"],
        "description": "Message read receipts"
    },
    "friendship": {
        "table": FRIENDSHIPS_TABLE,
        "operations": ["select", "insert", "update", "delete"],
        "description": "Friend requests and their acceptance state machine"
    },
    "denied_friend_request": {
        "table": DENIED_FRIEND_REQUESTS_TABLE,
        "operations": ["select", "insert", "delete"],
        "description": "Standing friend request blocks set by a Texter's Owner"
    },
    "quick_message": {
        "table": QUICK_MESSAGES_TABLE,
        "operations": ["select", "insert", "update", "delete"],
        "description": "Owner-provisioned canned replies"
    },
    "texter_settings": {
        "table": TEXTER_SETTINGS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Texter capability flags and quiet hours"
    },
    "sos_alert": {
        "table": SOS_ALERTS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Texter emergency alerts"
    },
    "report": {
        "table": REPORTS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "User reports reviewed by Owners"
    },
    "call_log": {
        "table": CALL_LOGS_TABLE,
        "operations": ["select", "insert", "update"],
        "description": "Voice and video call logs"
    },
    "manual_subscription": {
        "table": MANUAL_SUBSCRIPTIONS_TABLE,
        "operations": ["select", "insert", "update", "delete"],
        "description": "Administratively granted plan entitlements"
    },
    "push_token": {
        "table": PUSH_TOKENS_TABLE,
        "operations": ["select", "insert", "update", "delete"],
        "description": "Device push tokens"
    },
    "user_session": {
        "table": USER_SESSIONS_TABLE,
        "operations": ["select", "insert", "update", "delete"],
        "description": "Signed-in device sessions"
    },
}

# Families whose writes are reserved for the service identity
SERVICE_ONLY_WRITES = {
    "manual_subscription": "Only the service identity may grant, change or revoke subscriptions"
}


def is_operation_defined(resource_type: str, operation: str) -> bool:
    family = RESOURCE_FAMILIES.get(resource_type)
    if family is None:
        return False
    return operation in family["operations"]


# Generate policy matrix
def get_policy_matrix():
    """
    Returns a dictionary with every resource family and its operations
    Format: {
        "resources": [
            {"name": "team", "table": "teams", "operations": ["select", ...], "description": "..."},
            ...
        ],
        "permissions": ["team:select", "team:insert", ...]
    }
    """
    resources = []
    permissions = []

    for resource_type, family in RESOURCE_FAMILIES.items():
        description = family["description"]
        if resource_type in SERVICE_ONLY_WRITES:
            description = f"{description} ({SERVICE_ONLY_WRITES[resource_type]})"

        resources.append({
            "name": resource_type,
            "table": family["table"],
            "operations": list(family["operations"]),
            "description": description
        })

        for operation in family["operations"]:
            permissions.append(f"{resource_type}:{operation}")

    return {
        "resources": resources,
        "permissions": sorted(permissions)
    }


# Export the matrix for the policies endpoint
POLICY_MATRIX = get_policy_matrix()
