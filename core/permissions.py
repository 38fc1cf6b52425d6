# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # ADMIN: users, roles, reports, moderation
    # =====================================================
    "admin": ["*"],


    # =====================================================
    # OWNER: lists properties, manages bookings/issues,
    # runs community content for their tenants
    # =====================================================
    "owner": [
        "properties:read", "properties:write",
        "bookings:read", "bookings:write",
        "issues:read", "issues:write",
        "payments:read",
        "announcements:write",
        "polls:write",
        "events:write",
        "community:read", "community:write",
    ],


    # =====================================================
    # TENANT: browses, books, pays, reports issues
    # =====================================================
    "tenant": [
        "properties:read",
        "bookings:read", "bookings:write",
        "issues:read", "issues:write",
        "payments:read", "payments:write",
        "community:read", "community:write",
    ],
}
