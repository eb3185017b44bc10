from typing import Any, Callable

from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware


class CurrentUser(BaseModel):
    email: str


def request_attr(name: str) -> Callable[[Request], Any]:
    """Dependency factory: ``request.state.<name>``, or None when unset."""

    def dependency(request: Request) -> Any:
        return getattr(request.state, name, None)

    dependency.__name__ = f"request_{name}"
    return dependency


current_user = request_attr("user")


def require_user(user: Any = Depends(current_user)) -> Any:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Email header (dev auth)",
        )
    return user


class DevUserMiddleware(BaseHTTPMiddleware):
    """
    DEV AUTH: pass X-User-Email header to simulate logged-in user.
    Example: X-User-Email: admin@local.test
    """

    async def dispatch(self, request: Request, call_next):
        email = request.headers.get("x-user-email")
        if email:
            request.state.user = CurrentUser(email=email)
        return await call_next(request)
