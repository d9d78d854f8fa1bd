import hmac
from typing import Protocol

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from support_rag.config import ADMIN_PASSWORD, ADMIN_USERNAME

basic_auth = HTTPBasic(auto_error=False)


class Authenticator(Protocol):
    def is_authorized(self, username: str, password: str) -> bool:
        ...


class SharedSecretAuthenticator:
    """Checks credentials against one configured admin username/password pair."""

    def __init__(self, username: str = ADMIN_USERNAME, password: str = ADMIN_PASSWORD):
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")

    def is_authorized(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username)
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password)
        return user_ok and pass_ok


async def require_admin(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
) -> str:
    """
    Reads HTTP Basic credentials and checks them with the app's Authenticator.
    Returns the admin username on success, or raises HTTPException on failure.
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Missing admin credentials",
                            headers={"WWW-Authenticate": "Basic"})

    authenticator: Authenticator = request.app.state.authenticator
    if not authenticator.is_authorized(credentials.username, credentials.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Invalid credentials",
                            headers={"WWW-Authenticate": "Basic"})

    return credentials.username
