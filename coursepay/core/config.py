import os

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, Field

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class DBSettings(BaseSettings):
    name: str = "coursepay"
    user: str = "postgres"
    password: SecretStr = SecretStr("postgres")
    host: str = "localhost"
    port: int = 5435
    echo: bool = False
    # full SQLAlchemy URL, overrides the fields above
    url: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=os.path.join(BASE_DIR, ".env"),
        extra="ignore",
    )


class StripeSettings(BaseSettings):
    secret_key: SecretStr
    webhook_secret: SecretStr
    currency: str = "eur"
    # fixed exchange rate from the catalog currency to `currency`
    exchange_rate: float = Field(3.32, gt=0)
    success_url: str = "http://localhost:5173/course-progress/{course_id}"
    cancel_url: str = "http://localhost:5173/course-detail/{course_id}"
    allowed_countries: list[str] = ["FR", "US", "IT", "DE"]

    model_config = SettingsConfigDict(
        env_prefix="STRIPE_",
        env_file=os.path.join(BASE_DIR, ".env"),
        extra="ignore",
    )


class Settings(BaseSettings):
    app_name: str = "CoursePay"
    debug: bool = False
    log_level: str = "INFO"
    db_settings: DBSettings = Field(default_factory=DBSettings)
    stripe_settings: StripeSettings = Field(default_factory=StripeSettings)
    secret_key: str
    algorithm: str = "HS256"

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )
