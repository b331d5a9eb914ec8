"""Application configuration settings.

Values can be overridden via environment variables.
"""
import os


class Settings:
    # JWT / Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "CHANGEME_SUPER_SECRET")
    ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # Uploads: how many times a colliding insert is re-resolved before giving up
    UPLOAD_MAX_ATTEMPTS: int = int(os.getenv("UPLOAD_MAX_ATTEMPTS", "5"))

    # Comma-separated list, "*" allows everything
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    # Password given to users created by the seed fixtures
    SEED_PASSWORD: str = os.getenv("SEED_PASSWORD", "testpassword")


settings = Settings()
