from core.permissions import ROLE_PERMISSIONS


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def get_effective_permissions(role: str) -> set:
    return set(ROLE_PERMISSIONS.get(role, []))


def has_permission(role: str, permission: str) -> bool:
    effective = get_effective_permissions(role)

    # Wildcard grants everything
    if "*" in effective:
        return True

    return permission in effective


def is_admin(user) -> bool:
    """Check if an authenticated user is an admin."""
    return user is not None and user.role == "admin"
