"""
Role-based permission grants.

Actions are ``<verb>:<scope>`` strings such as ``download:own``. A role that
holds the ``:unlimited`` or ``:all`` form of an action also satisfies the
``:own`` form.
"""

from typing import Any, FrozenSet

from ..constants import ROLE_PERMISSIONS, UserRole

OWN_SCOPE = ":own"
BROADER_SCOPES = (":unlimited", ":all")


def permissions_for(role: Any) -> FrozenSet[str]:
    """Grants for a role; unknown roles get nothing."""
    try:
        return ROLE_PERMISSIONS.get(UserRole.parse(role), frozenset())
    except ValueError:
        return frozenset()


def has_permission(role: Any, action: str) -> bool:
    grants = permissions_for(role)
    if action in grants:
        return True

    if action.endswith(OWN_SCOPE):
        verb = action[: -len(OWN_SCOPE)]
        return any(verb + scope in grants for scope in BROADER_SCOPES)

    return False
