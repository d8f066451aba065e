"""Permission checks consulted by command conditions."""

from slashnote.core.permissions.abilities import (
    ABILITY_MAP,
    Ability,
    Action,
    ability_for,
)
from slashnote.core.permissions.policy import (
    PermissionOracle,
    Role,
    RolePermissionPolicy,
)

__all__ = [
    "ABILITY_MAP",
    "Ability",
    "Action",
    "PermissionOracle",
    "Role",
    "RolePermissionPolicy",
    "ability_for",
]
