"""Administrator identity package."""

from warden.admin.identity import normalize_identity_token, same_identity
from warden.admin.service import AdministratorService

__all__ = ["AdministratorService", "normalize_identity_token", "same_identity"]
