"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Trip builder settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Islands
    hub_island: str = "Port Blair (South Andaman)"
    island_priority: list[str] = [
        "Port Blair (South Andaman)",
        "Havelock (Swaraj Dweep)",
        "Neil (Shaheed Dweep)",
        "Long Island (Middle Andaman)",
        "Diglipur (North Andaman)",
    ]
    scooter_islands: list[str] = ["Havelock (Swaraj Dweep)", "Neil (Shaheed Dweep)"]
    airport_name: str = "Veer Savarkar International Airport (IXZ)"

    # Day capacity
    max_stops_per_day: int = 4
    max_hours_per_day: float = 7.0
    default_duration_hours: float = 2.0

    # Ferry display windows (HH:MM) when no transit record matches
    ferry_outbound_window: tuple[str, str] = ("08:00", "09:30")
    ferry_return_window: tuple[str, str] = ("15:00", "16:30")

    # Catalog storage
    catalog_base_url: str = "http://localhost:5173/data"
    catalog_timeout_seconds: float = 8.0

    # Pricing (whole INR)
    ferry_base_rate: int = 1500
    ferry_class_multipliers: dict[str, float] = {"Economy": 1.0, "Deluxe": 1.4, "Luxury": 1.9}
    default_ferry_class: str = "Deluxe"
    cab_day_rates: dict[str, int] = {
        "sedan": 2500,
        "suv": 3200,
        "innova": 3800,
        "traveller": 5200,
    }
    default_cab_model: str = "suv"
    p2p_rate_per_hop: int = 500
    scooter_day_rate: int = 800

    # Add-on suggestions
    suggestion_limit: int = 12
    per_location_suggestion_limit: int = 3


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
