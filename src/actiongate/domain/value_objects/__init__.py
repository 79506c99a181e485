"""Domain value objects."""

from actiongate.domain.value_objects.action_key import (
    ACTION_KEY_MAX_LENGTH,
    ActionKey,
    action_key_problem,
)
from actiongate.domain.value_objects.error_kind import ErrorKind
from actiongate.domain.value_objects.permission_set import (
    ALL_PERMISSIONS,
    effective_permissions,
    is_within,
    missing_permissions,
    normalize_permissions,
)
from actiongate.domain.value_objects.token_hash import TokenHash

__all__ = [
    "ACTION_KEY_MAX_LENGTH",
    "ALL_PERMISSIONS",
    "ActionKey",
    "ErrorKind",
    "TokenHash",
    "action_key_problem",
    "effective_permissions",
    "is_within",
    "missing_permissions",
    "normalize_permissions",
]
