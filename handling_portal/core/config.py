from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "Layanan Handling Bandara API"
    # Comma-separated origins for CORS. If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Hosted Postgres gives postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v

    # Managed backend (identity + storage REST)
    BACKEND_URL: str = "http://localhost:54321"
    BACKEND_ANON_KEY: str = ""
    BACKEND_SERVICE_KEY: str = ""
    BACKEND_JWT_SECRET: str = ""
    BACKEND_JWT_AUDIENCE: str = "authenticated"
    BACKEND_TIMEOUT: int = 20

    PASSWORD_RESET_REDIRECT_URL: str = "http://localhost:5173/update-password"

    # Storage buckets
    KYC_BUCKET: str = "agent-documents"
    TRANSFER_PROOF_BUCKET: str = "transfer-proofs"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Group handling catalog selectors
    HANDLING_SERVICE_TYPE: str = "Handling Passenger"
    HANDLING_GROUP_CATEGORY: str = "Agent Group"
    # catalog row id for each group trip type
    HANDLING_PRICE_IDS: dict[str, int] = {"arrival": 40, "departure": 41, "arrival_departure": 42, "transit": 46}

    MIN_TOPUP_AMOUNT: int = 10000


settings = Settings()
