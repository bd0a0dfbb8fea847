"""Authentication and registration schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CompanyInfo(BaseModel):
    """Registration wizard step 1."""

    name: str = Field(..., min_length=1, max_length=255)
    industry: str | None = Field(None, max_length=100)
    business_size: str | None = Field(None, max_length=50)
    num_locations: int | None = Field(None, ge=1)


class ContactDetails(BaseModel):
    """Registration wizard step 2."""

    contact_name: str = Field(..., min_length=1, max_length=255)
    contact_email: EmailStr = Field(..., max_length=255)
    phone_number: str | None = Field(None, max_length=50)
    job_title: str | None = Field(None, max_length=100)


class AccountCredentials(BaseModel):
    """Registration wizard step 3."""

    username: str | None = Field(None, max_length=100)
    password: str = Field(..., min_length=8, max_length=128)


class UserRegister(BaseModel):
    """Full registration payload submitted at the end of the wizard."""

    company_info: CompanyInfo
    contact_details: ContactDetails
    account_credentials: AccountCredentials


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    remember_me: bool = False


class RememberMeLogin(BaseModel):
    token: str = Field(..., min_length=1, max_length=64)


class ForgotPassword(BaseModel):
    email: EmailStr = Field(..., max_length=255)


class ResetPassword(BaseModel):
    token: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=8, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None
    role: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    success: bool = True
    access_token: str
    token_type: str = "bearer"  # noqa: S105
    remember_token: str | None = None
    user: UserResponse
