import resend
import logging
from app.configs.app_settings import settings
from app.custom_error import EmailSendError

logger = logging.getLogger(__name__)

# Initialize Resend with API key
resend.api_key = settings.RESEND_API_KEY


class EmailService:
    """Service for sending transactional emails via Resend"""

    @staticmethod
    def send_verification_code(email: str, code: str, expires_in_minutes: int) -> None:
        """
        Send a one-time verification code.
        Raises EmailSendError with the provider message when Resend rejects the request
        """
        try:
            html_content = f"""
            <html>
                <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
                    <h2 style="color: #e11d48;">Verify your email for Datifyy</h2>
                    <p>Use the code below to finish signing in:</p>
                    <p style="font-size: 28px; letter-spacing: 6px; font-weight: bold;">{code}</p>
                    <p style="color: #6b7280; font-size: 14px;">This code expires in {expires_in_minutes} minutes.</p>
                </body>
            </html>
            """

            params = {
                "from": settings.EMAIL_FROM,
                "to": [email],
                "subject": "Your Datifyy verification code",
                "html": html_content,
            }

            sent = resend.Emails.send(params)
            logger.info(f"✅ Verification code sent to {email}: {sent}")

        except Exception as e:
            logger.error(f"❌ Failed to send verification code to {email}: {str(e)}")
            raise EmailSendError(str(e))

    @staticmethod
    def send_waitlist_welcome(email: str, name: str) -> bool:
        """
        Welcome mail for new waitlist signups
        Returns True if email sent successfully, False otherwise
        """
        try:
            html_content = f"""
            <html>
                <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
                    <h2 style="color: #e11d48;">You're on the Datifyy waitlist, {name}!</h2>
                    <p>We will let you know as soon as curated dates open in your city.</p>
                </body>
            </html>
            """

            params = {
                "from": settings.EMAIL_FROM,
                "to": [email],
                "subject": "Welcome to the Datifyy waitlist",
                "html": html_content,
            }

            sent = resend.Emails.send(params)
            logger.info(f"✅ Waitlist welcome sent to {email}: {sent}")
            return True

        except Exception as e:
            logger.error(f"❌ Failed to send waitlist welcome to {email}: {str(e)}")
            # Don't raise exception - email failure must not block the signup
            return False
