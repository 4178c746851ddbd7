from pydantic import BaseModel, Field


class SendVerificationCodeResponse(BaseModel):
    message: str
    expires_in_seconds: int


class VerifyCodeRequest(BaseModel):
    code: str = Field(min_length=6, max_length=6, pattern=r"^\d{6}$")


class VerifyCodeResponse(BaseModel):
    verified: bool
