"""Application settings loaded from environment."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from environment variables or a .env file.

    Attributes:
        sendgrid_api_key: API key for outbound report emails.  Empty disables
            the email route.
        sendgrid_base_url: Root URL of the SendGrid v3 API.
        email_from: Sender address used on report emails.
        report_store_path: JSON file holding saved report snapshots.
        platform_name: Brand drawn in the page header band.
        default_reduction_target: Reduction target (%) used when the
            emissions data does not state one.
        default_carbon_credit_price: Carbon credit price ($/tCO2e) used when
            the emissions data does not state one.
    """

    sendgrid_api_key: str = Field("", validation_alias="SENDGRID_API_KEY")
    sendgrid_base_url: str = Field(
        "https://api.sendgrid.com", validation_alias="SENDGRID_BASE_URL"
    )
    email_from: str = Field(
        "reports@carbonprospect.com", validation_alias="EMAIL_FROM"
    )
    report_store_path: Path = Field(
        Path(".carbonprospect_reports.json"), validation_alias="REPORT_STORE_PATH"
    )
    platform_name: str = Field("Carbon Prospect", validation_alias="PLATFORM_NAME")
    default_reduction_target: float = Field(
        20.0, validation_alias="DEFAULT_REDUCTION_TARGET"
    )
    default_carbon_credit_price: float = Field(
        25.0, validation_alias="DEFAULT_CARBON_CREDIT_PRICE"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Uses ``lru_cache`` so the .env file is read at most once per process.
    """
    return Settings()
