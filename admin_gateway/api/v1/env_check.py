from fastapi import APIRouter, Depends

from admin_gateway.core.config import Settings, get_settings

router = APIRouter()


@router.get("/_env/check")
async def env_check(settings: Settings = Depends(get_settings)):
    """
    Which gateway settings are present. Secrets are reported as booleans only.
    """
    return {
        "ADMIN_API": settings.ADMIN_API,
        "ADMIN_API_TOKEN": bool(settings.ADMIN_API_TOKEN),
        "SUPERADMIN_EMAILS": len(settings.superadmin_emails),
        "POLICY_BACKEND": settings.POLICY_BACKEND,
        "IDENTITY_TIMEOUT_SECONDS": settings.IDENTITY_TIMEOUT_SECONDS,
        "UPSTREAM_TIMEOUT_SECONDS": settings.UPSTREAM_TIMEOUT_SECONDS,
    }
