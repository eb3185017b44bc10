"""
Per-route rate limit metadata.

Routes declare their policy at registration time through a dependency:

    @router.post("/auth/login", dependencies=[custom_throttle(5, 60)])

The policy is attached to ``request.state.throttle`` for whatever limiter
sits in front of the app. Nothing here counts or rejects requests.
"""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.params import Depends as DependsParam

from supervision_api.core.config import settings


@dataclass(frozen=True)
class ThrottlePolicy:
    limit: int
    ttl: int  # window in seconds
    skip: bool = False

    def __post_init__(self):
        if not self.skip and (self.limit < 1 or self.ttl < 1):
            raise ValueError("Throttle limit and ttl must be >= 1")


SKIP_THROTTLE = ThrottlePolicy(limit=0, ttl=0, skip=True)


def default_policy() -> ThrottlePolicy:
    return ThrottlePolicy(limit=settings.THROTTLE_LIMIT, ttl=settings.THROTTLE_TTL)


def _attach(policy: ThrottlePolicy) -> DependsParam:
    def dependency(request: Request) -> ThrottlePolicy:
        request.state.throttle = policy
        return policy

    dependency.policy = policy
    return Depends(dependency)


def custom_throttle(limit: int, ttl: int) -> DependsParam:
    """Allow ``limit`` requests per ``ttl`` seconds on this route."""
    return _attach(ThrottlePolicy(limit=limit, ttl=ttl))


def skip_throttle() -> DependsParam:
    """Exempt this route (health checks, webhooks) from rate limiting."""
    return _attach(SKIP_THROTTLE)


def resolve_throttle(request: Request) -> ThrottlePolicy:
    return getattr(request.state, "throttle", None) or default_policy()
