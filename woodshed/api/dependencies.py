import hmac
import logging

from fastapi import Header, HTTPException, Request

from woodshed.config import AppConfig
from woodshed.practice.tracker import PracticeLog


logger = logging.getLogger(__name__)


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_practice_log(request: Request) -> PracticeLog:
    return request.app.state.practice_log


def require_bearer_token(request: Request, authorization: str | None = Header(default=None)) -> None:
    """Reject writes that do not carry the shared practice log secret."""
    secret = get_config(request).get("PRACTICE_LOG_SECRET")
    expected = f"Bearer {secret}"
    # compare_digest only accepts ASCII str, headers may carry latin-1
    if not secret or not authorization or not hmac.compare_digest(
        authorization.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("Rejected practice log write with missing or invalid token")
        raise HTTPException(status_code=401, detail="unauthorized")
