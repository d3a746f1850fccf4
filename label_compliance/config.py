"""Application configuration."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # App settings
    app_name: str = "Label Compliance API"
    debug: bool = False
    log_level: str = "INFO"
    
    # CORS - Allow all origins for prototype (restrict in production)
    cors_origins: list[str] = ["*"]
    
    # Comparison thresholds
    abv_match_tolerance: float = 0.001  # ABV values closer than this are equal
    proof_consistency_tolerance: float = 0.1  # Allowed drift between proof and 2x ABV
    address_review_max_missing: int = 2  # More missing address words than this is a mismatch
    
    # Batch processing
    max_batch_size: int = 50
    max_workers: int = 4  # Comparison is cheap; threads only bound fan-out
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
