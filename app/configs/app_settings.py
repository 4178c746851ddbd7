from pydantic_settings import BaseSettings
from typing import List, Optional

# BaseSettings pulls values from the system environment first, then the .env file, then the defaults below.
# nothing here is required so the mock-backed admin dashboard can boot with an empty environment.


class Settings(BaseSettings):
    # API Settings
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Supabase (only needed when USE_MOCK_DATA is off)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None

    # Mock data switch for admin dashboards
    USE_MOCK_DATA: bool = True
    MOCK_TRANSACTION_COUNT: int = 150
    MOCK_CURATED_DATE_COUNT: int = 50
    MOCK_DATA_SEED: Optional[int] = None

    # Clerk JWT settings
    CLERK_JWKS_URL: str = "https://clerk.datifyy.com/.well-known/jwks.json"
    ADMIN_CLERK_USER_IDS: List[str] = []

    # Resend API Key
    RESEND_API_KEY: Optional[str] = None
    EMAIL_FROM: str = "Datifyy <noreply@datifyy.com>"

    # verification codes
    VERIFICATION_CODE_TTL_SECONDS: int = 15 * 60
    VERIFICATION_CODE_MAX_ATTEMPTS: int = 5

    class Config:
        # system environment variables win over .env, .env wins over the defaults above
        env_file = ".env"
        case_sensitive = True


# module is executed once per process, every "from app.configs.app_settings import settings" shares this instance
settings = Settings()
