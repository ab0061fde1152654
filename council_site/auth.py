"""
Admin gate: HTTP Basic credentials checked against the configured admin.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from council_site.config import Settings, get_settings

logger = logging.getLogger(__name__)

REALM = "Admin Area"

_basic = HTTPBasic(auto_error=False, realm=REALM)


def credentials_match(
    credentials: Optional[HTTPBasicCredentials], settings: Settings
) -> bool:
    if credentials is None or not settings.admin_password:
        return False
    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        settings.admin_username.encode("utf-8"),
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        settings.admin_password.encode("utf-8"),
    )
    return username_ok and password_ok


def require_admin_page(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guard for admin pages; failures carry a Basic challenge."""
    if not credentials_match(credentials, settings):
        logger.warning("Rejected admin credentials for %s", request.url.path)
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
        )


def require_admin_api(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guard for admin API calls; failures are plain JSON errors."""
    if not credentials_match(credentials, settings):
        logger.warning("Rejected admin credentials for %s", request.url.path)
        raise HTTPException(status_code=401, detail="Unauthorized")
