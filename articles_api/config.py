from sqlalchemy.engine import URL
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_USER: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_NAME: str = "articles"
    DATABASE_PASSWORD: str = ""
    DATABASE_PORT: int = 5432
    # Full URL; takes precedence over the individual DATABASE_* parts.
    DATABASE_URL: str | None = None

    PORT: int = 3000
    DEBUG: bool = False

    # Pool sizing
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0

    # Compatibility switches
    STRICT_STATUS_CODES: bool = False
    EMPTY_LIST_IS_ERROR: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the asyncpg driver."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        url = URL.create(
            "postgresql+asyncpg",
            username=self.DATABASE_USER,
            password=self.DATABASE_PASSWORD or None,
            host=self.DATABASE_HOST,
            port=self.DATABASE_PORT,
            database=self.DATABASE_NAME,
        )
        return url.render_as_string(hide_password=False)


settings = Settings()
