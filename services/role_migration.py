# services/role_migration.py

"""
Move legacy `users.role` values into the user_roles table.

Safe to run more than once: the role row is upserted by user_id.
"""

from core.logging_config import logger
from core.supabase_helpers import safe_select, safe_update
from models.enums import Role
from models.user_role import RoleMigrationResult
from services.session import assign_role


def migrate_user_roles(remove_from_users: bool = True) -> RoleMigrationResult:
    users = safe_select("users")
    logger.info(f"Role migration: {len(users)} users found")

    migrated = skipped = errors = 0

    for user in users:
        legacy_role = user.get("role")
        if not legacy_role:
            skipped += 1
            continue

        if legacy_role not in Role.list():
            logger.warning(f"Role migration: user {user['id']} has unknown role '{legacy_role}'")
            errors += 1
            continue

        try:
            assign_role(user["id"], legacy_role, assigned_by="migration_script")
            if remove_from_users:
                safe_update("users", {"id": user["id"]}, {"role": None})
            migrated += 1
        except Exception as e:
            logger.error(f"Role migration failed for user {user['id']}: {e}")
            errors += 1

    logger.info(f"Role migration done: migrated={migrated} skipped={skipped} errors={errors}")
    return RoleMigrationResult(migrated=migrated, skipped=skipped, errors=errors)
