from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str = ""
    token_type: str = "bearer"
    role: Optional[str] = None


class AgentRegistration(BaseModel):
    companyName: str = Field(min_length=2)
    fullName: str = Field(min_length=2)
    email: EmailStr
    phoneNumber: str = Field(min_length=8)
    password: str = Field(min_length=6)
    termsAccepted: bool

    @field_validator("termsAccepted")
    @classmethod
    def must_accept_terms(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("You must accept the terms and conditions")
        return v


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class UpdatePasswordRequest(BaseModel):
    accessToken: str = Field(min_length=1)  # recovery session token from the reset link
    password: str = Field(min_length=6)
    confirmPassword: str = Field(min_length=6)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirmPassword:
            raise ValueError("Passwords don't match")
        return self
