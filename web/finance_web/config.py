import os
from functools import lru_cache
from pydantic import BaseModel

# Defaults match a local development backend; load_settings() overlays the
# environment.
DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_JWT_SECRET = "fallback-secret-key"


class Settings(BaseModel):
    """Runtime settings for the web client."""
    api_url: str = DEFAULT_API_URL
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithms: list[str] = ["HS256"]
    token_cookie: str = "token"
    request_timeout: float = 10.0
    log_level: str = "INFO"
    currency_symbol: str = "₹"
    login_path: str = "/auth/login"
    home_path: str = "/dashboard"
    public_routes: list[str] = ["/auth/login", "/auth/register"]
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    max_workspaces: int = 256


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_settings() -> Settings:
    """Build settings from environment variables."""
    values: dict = {}
    if "FINANCE_API_URL" in os.environ:
        values["api_url"] = os.environ["FINANCE_API_URL"]
    if "JWT_SECRET" in os.environ:
        values["jwt_secret"] = os.environ["JWT_SECRET"]
    if "JWT_ALGORITHMS" in os.environ:
        values["jwt_algorithms"] = _split(os.environ["JWT_ALGORITHMS"])
    if "TOKEN_COOKIE" in os.environ:
        values["token_cookie"] = os.environ["TOKEN_COOKIE"]
    if "FINANCE_REQUEST_TIMEOUT" in os.environ:
        values["request_timeout"] = float(os.environ["FINANCE_REQUEST_TIMEOUT"])
    if "FINANCE_LOG_LEVEL" in os.environ:
        values["log_level"] = os.environ["FINANCE_LOG_LEVEL"].upper()
    if "FINANCE_CURRENCY_SYMBOL" in os.environ:
        values["currency_symbol"] = os.environ["FINANCE_CURRENCY_SYMBOL"]
    if "FINANCE_CORS_ORIGINS" in os.environ:
        values["cors_origins"] = _split(os.environ["FINANCE_CORS_ORIGINS"])
    if "FINANCE_MAX_WORKSPACES" in os.environ:
        values["max_workspaces"] = int(os.environ["FINANCE_MAX_WORKSPACES"])
    return Settings(**values)


@lru_cache
def get_settings() -> Settings:
    """Settings for the running process, read once."""
    return load_settings()
