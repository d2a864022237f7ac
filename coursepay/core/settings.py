from .config import Settings

settings = Settings()


DB_HOST = settings.db_settings.host
DB_PORT = settings.db_settings.port
DB_USER = settings.db_settings.user
DB_PASSWORD = settings.db_settings.password.get_secret_value()
DB_NAME = settings.db_settings.name

SQLALCHEMY_DATABASE_URL = settings.db_settings.url or (
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

SQLALCHEMY_ECHO = settings.db_settings.echo

STRIPE_SECRET_KEY = settings.stripe_settings.secret_key.get_secret_value()
STRIPE_WEBHOOK_SECRET = settings.stripe_settings.webhook_secret.get_secret_value()
STRIPE_CURRENCY = settings.stripe_settings.currency
STRIPE_EXCHANGE_RATE = settings.stripe_settings.exchange_rate

# JWT
ACCESS_TOKEN_EXPIRE_MINUTES = 1 * 24 * 60  # 1 day


def get_auth_data():
    return {"secret_key": settings.secret_key, "algorithm": settings.algorithm}
