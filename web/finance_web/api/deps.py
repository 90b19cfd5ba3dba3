from fastapi import Request

from ..config import Settings
from ..errors import AuthFailure
from ..schemas import FALLBACK_USER, Identity, User
from ..services.backend_client import BackendClient
from ..services.workspace import Workspace


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity(request: Request) -> Identity:
    """Identity verified by the route guard for this request."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise AuthFailure("No verified session for this request")
    return identity


def get_client(request: Request) -> BackendClient:
    settings = get_settings(request)
    return BackendClient(
        request.app.state.http,
        request.cookies.get(settings.token_cookie),
        settings.token_cookie,
    )


def get_workspace(request: Request) -> Workspace:
    """FastAPI dependency for the workspace of this request's session."""
    get_identity(request)
    client = get_client(request)
    return request.app.state.workspaces.get(client.token, client)


async def load_user(workspace: Workspace, identity: Identity) -> User:
    """Profile from the backend, else built from the token, else a placeholder."""
    user = await workspace.client.fetch_profile()
    if user is not None:
        return user
    if identity.username or identity.email:
        return User(id=identity.subject, username=identity.username, email=identity.email)
    return FALLBACK_USER
