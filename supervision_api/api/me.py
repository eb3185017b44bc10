from fastapi import APIRouter, Depends, Request

from supervision_api.core.security import CurrentUser, require_user
from supervision_api.core.throttle import custom_throttle, resolve_throttle

router = APIRouter(tags=["auth"])


@router.get("/me", dependencies=[custom_throttle(30, 60)])
def me(request: Request, current_user: CurrentUser = Depends(require_user)):
    """Get the user attached to this request and the rate limit that applies to it"""
    policy = resolve_throttle(request)
    return {
        "email": current_user.email,
        "throttle": {"limit": policy.limit, "ttl": policy.ttl, "skip": policy.skip},
    }
