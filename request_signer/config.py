"""Environment configuration management."""
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Signer settings loaded from SIGNER_* environment variables."""
    
    secret: Optional[str] = None
    prefix: str = "http://127.0.0.1:8080"
    api_key: Optional[str] = None
    timestamp_header: str = "timestamp"
    sign_header: str = "sign"
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        env_prefix = "SIGNER_"
        case_sensitive = False
    
    def validate_secret(self) -> bool:
        """Check if signing secret is set and non-empty."""
        return self.secret is not None and len(self.secret) > 0


# Global settings instance
settings = Settings()
