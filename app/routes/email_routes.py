from fastapi import APIRouter, Depends, Path
from pydantic import EmailStr
from app.data_sources.base import VerificationCodeStore
from app.data_sources.providers import get_verification_code_store
from app.services.verification_code_services import VerificationCodeService
from app.models.email_models import SendVerificationCodeResponse, VerifyCodeRequest, VerifyCodeResponse

email_router = APIRouter(prefix="/emails", tags=["Emails"])


async def get_verification_code_service(
    code_store: VerificationCodeStore = Depends(get_verification_code_store),
) -> VerificationCodeService:
    """Dependency to get VerificationCodeService instance"""
    return VerificationCodeService(code_store)


@email_router.post("/{email}/send-verification-codes", response_model=SendVerificationCodeResponse)
async def send_verification_codes(
    email: EmailStr = Path(..., description="Address that receives the code"),
    verification_service: VerificationCodeService = Depends(get_verification_code_service),
):
    """Mail a six digit verification code through Resend"""
    return await verification_service.send_verification_code(email)


@email_router.post("/{email}/verify-code", response_model=VerifyCodeResponse)
async def verify_code(
    verify_request: VerifyCodeRequest,
    email: EmailStr = Path(...),
    verification_service: VerificationCodeService = Depends(get_verification_code_service),
):
    """Check a code issued by send-verification-codes"""
    return await verification_service.verify_code(email, verify_request.code)
