import logging

from fastapi import APIRouter, Header

from wedding_api.schemas.auth import AdminSessionResponse
from wedding_api.services.admin_session import check_passcode, create_session_token
from wedding_api.services.photo_index import format_timestamp
from wedding_api.utils.exceptions import Unauthorized

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/session")
async def create_admin_session(x_admin_passcode: str = Header(default="")):
    """Exchange the admin passcode for a signed, time-limited session token."""
    if not check_passcode(x_admin_passcode):
        logger.warning("Admin session refused: wrong passcode")
        raise Unauthorized()

    token, expires_at = create_session_token()
    logger.info("Issued admin session token valid until %s", expires_at.isoformat())
    return AdminSessionResponse(token=token, expires_at=format_timestamp(expires_at)).model_dump(by_alias=True)
