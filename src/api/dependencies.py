"""Shared route configuration presets."""

from src.api.handler import AuthOptions
from src.models.enums import Role

AUTHENTICATED = AuthOptions(required=True)

ADMIN_ONLY = AuthOptions(required=True, roles=(Role.ADMIN,))

# Back-office screens open to staff accounts as well as admins
BACK_OFFICE = AuthOptions(required=True, roles=(Role.ADMIN, Role.MANAGER, Role.STAFF))
