"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# The Distance Matrix API accepts at most 25 origins or 25 destinations per request.
MAX_DESTINATIONS_PER_REQUEST = 25

DEFAULT_CLINICS_URL = (
    "https://raw.githubusercontent.com/navapbc/"
    "wic-mt-demo-project-eligibility-screener/"
    "4cb9a3fee1366175a8ea8323924b61f4d308e9d8/app/public/data/clinics.json"
)


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing before a run starts."""


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CLINIC_LOOKUP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="API key with the Distance Matrix API enabled.",
    )
    distance_matrix_url: str = Field(
        default="https://maps.googleapis.com/maps/api/distancematrix/json",
        description="Distance Matrix endpoint (JSON output).",
    )
    clinics_url: str = Field(
        default=DEFAULT_CLINICS_URL,
        description="Remote JSON document listing the clinics.",
    )
    clinic_address_field: str = Field(
        default="clinicAddress",
        description="Clinic record field holding the street address sent as a destination.",
    )
    zip_boundaries_file: Path = Field(
        default=Path("data/mt_zcta_20_bound-geo.json"),
        description="GeoJSON FeatureCollection of ZCTA boundaries with internal points.",
    )
    region_code_prefix: str = Field(
        default="59",
        description="Only zip codes starting with this prefix are processed.",
    )
    origin_overrides_file: Optional[Path] = Field(
        default=None,
        description="Optional JSON object of zip code -> origin address, merged over the built-in table.",
    )
    output_root: Path = Field(default=Path("output"), description="Directory receiving the lookup files.")
    batch_size: int = Field(default=MAX_DESTINATIONS_PER_REQUEST, ge=1, le=MAX_DESTINATIONS_PER_REQUEST)
    units: Literal["imperial", "metric"] = Field(
        default="imperial",
        description="Unit system used for the distance text returned by the provider.",
    )
    travel_mode: Literal["driving"] = "driving"
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    region_offset: int = Field(default=0, ge=0, description="Index of the first zip code to process.")
    region_limit: Optional[int] = Field(
        default=None,
        ge=0,
        description="Index one past the last zip code to process; all remaining when unset.",
    )
    log_level: str = "INFO"

    @field_validator("zip_boundaries_file", "output_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("origin_overrides_file", mode="before")
    @classmethod
    def _expand_optional_path(cls, value: Any) -> Optional[Path]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    def require_api_key(self) -> str:
        if not self.google_maps_api_key:
            raise ConfigurationError(
                "Google Maps API key is not configured. Set CLINIC_LOOKUP_GOOGLE_MAPS_API_KEY."
            )
        return self.google_maps_api_key


settings = Settings()
