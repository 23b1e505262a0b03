"""Route access table: which frontend paths each role may open.

Every reachable route for every role is listed in ``ROLE_PATHS``; the
navigation layer asks ``resolve`` and follows ``redirect_to`` when access
is refused. Unknown or missing roles are handled as ``UserRole.user``.
"""

from __future__ import annotations

from dataclasses import dataclass

from helpdesk.core.config import settings
from helpdesk.models.enums import UserRole, parse_role

ROLE_PATHS: dict[UserRole, tuple[str, ...]] = {
    UserRole.admin: ("/admin-dashboard", "/create-ticket"),
    UserRole.worker: ("/worker-dashboard", "/create-ticket"),
    UserRole.user: ("/my-tickets", "/create-ticket"),
}


def public_paths() -> frozenset[str]:
    return frozenset({settings.LOGIN_PATH})


def _route(path: str) -> str:
    route = path.split("?", 1)[0].split("#", 1)[0]
    return route.rstrip("/") or "/"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    redirect_to: str | None = None
    # Originally requested path, kept for a post-login bounce.
    from_path: str | None = None


def allowed_prefixes(role: UserRole | str | None) -> tuple[str, ...]:
    return ROLE_PATHS[parse_role(role)]


def landing_page(role: UserRole | str | None) -> str:
    return allowed_prefixes(role)[0]


def resolve(role: UserRole | str | None, path: str, *, authenticated: bool = True) -> AccessDecision:
    if _route(path) in public_paths():
        if authenticated:
            return AccessDecision(allowed=False, redirect_to=landing_page(role))
        return AccessDecision(allowed=True)

    if not authenticated:
        return AccessDecision(allowed=False, redirect_to=settings.LOGIN_PATH, from_path=path)

    prefixes = allowed_prefixes(role)
    if any(path.startswith(prefix) for prefix in prefixes):
        return AccessDecision(allowed=True)
    return AccessDecision(allowed=False, redirect_to=prefixes[0])
