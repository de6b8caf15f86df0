from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only signing secret; set JWT_SECRET in any real deployment
DEFAULT_JWT_SECRET = "insecure-development-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Frozen: built once at process start and passed to the pieces that need
    it, never mutated afterwards.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_name: str = "TCG Backend"
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 3000

    database_url: str = "postgresql+asyncpg://localhost:5432/tcg"

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7

    bcrypt_rounds: int = 10

    cors_origins: list[str] = ["*"]


settings = Settings()


# =============================================================================
# DECK CONSTRAINTS
# =============================================================================

# Every deck holds exactly this many card references
DECK_SIZE = 10

# Largest value an id column (32-bit INTEGER) can hold
MAX_ID = 2**31 - 1
