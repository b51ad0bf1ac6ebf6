from typing import List
from pydantic import field_validator
import re
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_DETECTION_PROVIDERS = ("google", "rekognition")

class Settings(BaseSettings):
    AWS_REGION: str = "us-east-2"
    S3_BUCKET_NAME: str = "xcape-menu-bucket"
    DETECTION_PROVIDER: str = "google"
    GOOGLE_SA_JSON: str = ""
    CORS_ALLOW_ORIGINS: str = "*"
    MAX_BODY_BYTES: int = 25 * 1024 * 1024
    LOG_LEVEL: str = "INFO"
    PORT: int = 8080

    @field_validator('AWS_REGION')
    @classmethod
    def valid_aws_region(cls, v: str) -> str:
        """Ensures the AWS region string is in the correct format."""
        if not re.match(r'^[a-z]{2}-[a-z]+-\d$', v):
            raise ValueError(f"'{v}' is not a valid AWS region format. Expected format like 'us-east-2'.")
        return v

    @field_validator('DETECTION_PROVIDER')
    @classmethod
    def valid_detection_provider(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SUPPORTED_DETECTION_PROVIDERS:
            raise ValueError(f"'{v}' is not a supported detection provider. Expected one of {SUPPORTED_DETECTION_PROVIDERS}.")
        return v

    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

    model_config = SettingsConfigDict(env_file=".env")

######################################
# Not cached: a changed .env must be picked up on restart of any
# entry point (server or scripts) without stale values lingering.
######################################

def get_settings():
    return Settings()
