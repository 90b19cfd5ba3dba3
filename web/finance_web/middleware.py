from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import Settings
from .services.route_guard import GuardAction, guard


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Applies the route guard to every request.

    Verified identities are stored on ``request.state.identity``; API routes
    also receive them as ``userId``, ``userEmail`` and ``username`` headers.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next):
        settings = self.settings
        decision = guard(
            request.url.path,
            request.cookies.get(settings.token_cookie),
            settings.jwt_secret,
            algorithms=settings.jwt_algorithms,
            public_routes=settings.public_routes,
            login_path=settings.login_path,
            home_path=settings.home_path,
        )

        if decision.action is GuardAction.REDIRECT:
            return RedirectResponse(decision.location, status_code=307)

        request.state.identity = decision.identity
        if decision.forward_identity:
            identity = decision.identity
            headers = [
                (name, value) for name, value in request.scope["headers"]
                if name not in (b"userid", b"useremail", b"username")
            ]
            headers += [
                (b"userid", identity.subject.encode()),
                (b"useremail", identity.email.encode()),
                (b"username", identity.username.encode()),
            ]
            request.scope["headers"] = headers

        return await call_next(request)
