from pydantic import BaseModel, ConfigDict, field_validator


class User(BaseModel):
    """Profile of the signed-in user."""
    id: str
    username: str = ""
    email: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if isinstance(value, int) else value

    @property
    def display_name(self) -> str:
        """Username with its first letter capitalised."""
        if not self.username:
            return "User"
        return self.username[0].upper() + self.username[1:]


FALLBACK_USER = User(id="fallback-user", username="User", email="user@example.com")


class Identity(BaseModel):
    """Claims decoded from a verified session token."""
    model_config = ConfigDict(frozen=True)

    subject: str
    email: str = ""
    username: str = ""
