
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bookingdesk.core.types import BulkAction, UserRole, UserStatus


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    role: UserRole
    status: UserStatus


class UserForm(BaseModel):
    """Create/edit form for a user, serialized with the backend's camelCase names."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    phone: str | None = None
    role: UserRole = "customer"
    status: UserStatus | None = "active"

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if not v:
            return None
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @classmethod
    def from_user(cls, user: User) -> "UserForm":
        """Prefill an edit form; the password is never prefilled."""
        return cls(
            email=user.email,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            phone=user.phone or "",
            role=user.role,
            status=user.status,
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class BulkActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: BulkAction
    user_ids: list[str] = Field(alias="userIds", min_length=1)
