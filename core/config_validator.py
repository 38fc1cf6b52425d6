# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of warnings.
    """
    warnings = []

    if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
        warnings.append("RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET (payments disabled)")
    if settings.JWT_SECRET_KEY == "dev-secret-change-me":
        warnings.append("JWT_SECRET_KEY (default dev secret in use)")

    return warnings


def is_production() -> bool:
    return settings.ENV.lower() in {"prod", "production"}


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    In production, missing required config (or the dev JWT secret) is fatal.
    Elsewhere everything is logged as a warning.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if is_production():
        if settings.JWT_SECRET_KEY == "dev-secret-change-me":
            missing_required.append("JWT_SECRET_KEY")
        if missing_required:
            error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
    else:
        for name in missing_required:
            logger.warning(f"Required configuration missing (non-production): {name}")

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    logger.info("Configuration validation passed")
