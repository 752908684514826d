from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class SignupRequest(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    login: str = Field("", description="Username or email")
    password: str = ""


class PasswordResetRequest(BaseModel):
    email: str = ""


class PasswordReset(BaseModel):
    token: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: User


class CurrentUserResponse(BaseModel):
    success: bool = True
    user: User


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class PasswordResetRequestResponse(MessageResponse):
    model_config = ConfigDict(populate_by_name=True)

    # Only populated when EXPOSE_RESET_TOKEN is enabled
    reset_token: str | None = Field(default=None, alias="resetToken")
