from app.data_sources.base import VerificationCodeStore
from app.services.email_services import EmailService
from app.models.email_models import SendVerificationCodeResponse, VerifyCodeResponse
from app.configs.app_settings import settings
from app.custom_error import ValidationError, ServerError, EmailSendError
from typing import Callable
import secrets
import logging
import time

logger = logging.getLogger(__name__)


class VerificationCodeService:
    def __init__(
        self,
        code_store: VerificationCodeStore,
        ttl_seconds: int = settings.VERIFICATION_CODE_TTL_SECONDS,
        max_attempts: int = settings.VERIFICATION_CODE_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.time,
    ):
        self.code_store = code_store
        self.ttl_seconds = ttl_seconds
        self.max_attempts = max_attempts
        self.clock = clock

    @staticmethod
    def _generate_code() -> str:
        return f"{secrets.randbelow(1_000_000):06d}"

    # --------------------------------------------------------------

    async def send_verification_code(self, email: str) -> SendVerificationCodeResponse:
        """Issue a fresh six digit code (replacing any earlier one) and mail it"""
        try:
            code = self._generate_code()
            await self.code_store.save_code(email, code, self.clock() + self.ttl_seconds)

            EmailService.send_verification_code(email, code, self.ttl_seconds // 60)

            return SendVerificationCodeResponse(message="Verification code sent successfully", expires_in_seconds=self.ttl_seconds)

        except Exception as e:
            logger.error(f"Error sending verification code: {str(e)}")
            if isinstance(e, EmailSendError):
                # an undeliverable code must not stay valid
                await self.code_store.delete_code(email)
                raise e
            raise ServerError(f"Failed to send verification code: {str(e)}")

    # --------------------------------------------------------------

    async def verify_code(self, email: str, code: str) -> VerifyCodeResponse:
        """Codes are single use; the code is dropped after max_attempts wrong guesses"""
        try:
            record = await self.code_store.get_code(email)

            if record is None or record["expires_at"] < self.clock():
                if record is not None:
                    await self.code_store.delete_code(email)
                raise ValidationError("Verification code has expired or does not exist")

            attempts = record["attempts"] + 1
            if attempts > self.max_attempts:
                await self.code_store.delete_code(email)
                raise ValidationError("Too many verification attempts. Please request a new code.")

            if not secrets.compare_digest(record["code"], code):
                await self.code_store.record_attempt(email, attempts)
                logger.warning(f"Invalid verification code attempt for {email} ({attempts}/{self.max_attempts})")
                raise ValidationError(f"Invalid verification code. {self.max_attempts - attempts} attempts remaining.")

            await self.code_store.delete_code(email)
            logger.info(f"✅ Email verified: {email}")
            return VerifyCodeResponse(verified=True)

        except Exception as e:
            logger.error(f"Error verifying code: {str(e)}")
            if isinstance(e, ValidationError):
                raise e
            raise ServerError(f"Failed to verify code: {str(e)}")
