import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    PATIENT_API_BASE_URL: str = os.getenv(
        "PATIENT_API_BASE_URL",
        "https://assessment.ksensetech.com/api",
    )
    PATIENT_API_KEY: str = os.getenv("PATIENT_API_KEY", "")
    PAGE_LIMIT: int = int(os.getenv("PAGE_LIMIT", "20"))
    PAGE_DELAY_SECONDS: float = float(os.getenv("PAGE_DELAY_SECONDS", "1.0"))
    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "4"))
    RETRY_BACKOFF_SECONDS: float = float(os.getenv("RETRY_BACKOFF_SECONDS", "1.0"))
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
