from fastapi import Depends
from fastapi.security import APIKeyCookie, APIKeyHeader

from shared.exceptions import SessionRequiredError

# The session id is issued upstream; we accept it from either carrier
session_header = APIKeyHeader(name="X-Session-Id", auto_error=False)
session_cookie = APIKeyCookie(name="session_id", auto_error=False)


async def get_session_id(
    header_value: str | None = Depends(session_header),
    cookie_value: str | None = Depends(session_cookie),
) -> str:
    """Dependency returning the caller's session id (header wins over cookie)."""
    session_id = (header_value or cookie_value or "").strip()
    if not session_id:
        raise SessionRequiredError(
            "Missing session id: send the X-Session-Id header or the session_id cookie"
        )
    return session_id
