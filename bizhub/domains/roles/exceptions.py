"""
Domain-specific exceptions for custom roles.
"""

from bizhub.shared.exceptions import BaseHTTPException


class RoleException(BaseHTTPException):
    """Base exception for role-related errors."""

    status_code = 400


class RoleNotFoundError(RoleException):
    status_code = 404
    message = "Role not found"


class InvalidRoleError(RoleException):
    """Raised when name, slug or permissions fail validation."""

    status_code = 400
    message = "Name and Slug are required"


class DuplicateRoleSlugError(RoleException):
    status_code = 409
    message = "A role with this slug already exists"


class SystemRoleDeletionError(RoleException):
    status_code = 403
    message = "System roles cannot be deleted"


class SystemRoleSlugError(RoleException):
    status_code = 400
    message = "The slug of a system role cannot be changed"


class RolePersistenceError(RoleException):
    """Raised when Supabase rejects a role read or write."""

    status_code = 500
    message = "Error saving role"
