"""User schemas."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from followgraph.models.user import AccountType
from followgraph.schemas.follow import UserSummary


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    profile_pic: str | None = Field(default=None, max_length=255)
    account_type: AccountType = AccountType.PUBLIC

    @field_validator("account_type", mode="before")
    @classmethod
    def _normalize_account_type(cls, value: str | AccountType) -> AccountType | str:
        """Allow case-insensitive enum values from clients."""

        if isinstance(value, str):
            return value.lower()
        return value


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    profile_pic: str | None = None
    account_type: AccountType

    model_config = ConfigDict(from_attributes=True)


class UserProfileRead(BaseModel):
    id: int
    username: str
    profile_pic: str | None = None
    account_type: AccountType
    followers_count: int
    following_count: int


class UserDirectoryPage(BaseModel):
    page: int
    limit: int
    users: list[UserSummary]
