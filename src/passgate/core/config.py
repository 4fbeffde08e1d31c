from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: str = "local"

    # allow full URL override (tests / managed DBs)
    database_url_override: str | None = None

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "passgate"
    db_user: str = "postgres"
    db_password: str | None = None

    stripe_api_key: SecretStr | None = None
    stripe_webhook_secret: SecretStr | None = None
    stripe_trial_price_id: str | None = None
    checkout_success_url: str = "https://subscribe.lamboliveagency.com/thank-you?session_id={CHECKOUT_SESSION_ID}"
    checkout_cancel_url: str = "https://subscribe.lamboliveagency.com/"

    paystack_secret_key: SecretStr | None = None
    paystack_base_url: str = "https://api.paystack.co"

    # provider calls sit on the webhook request path
    provider_timeout_sec: float = 5.0

    # always: ack every verified webhook except missing email (legacy behaviour)
    # after_persist: ack only once the entitlement is stored
    webhook_ack_mode: Literal["always", "after_persist"] = "always"

    cors_origins: list[str] = ["https://subscribe.lamboliveagency.com"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        # 1) Prefer explicit DATABASE_URL
        if self.database_url_override:
            return self.database_url_override

        password = self.db_password or ""
        auth = f"{self.db_user}:{password}" if password else self.db_user

        # 2) Fallback to postgres assembled URL
        return (
            f"postgresql+psycopg://{auth}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?connect_timeout=3"
        )


settings = Settings()
