"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_ENGINE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Route Optimization Engine API"
    api_prefix: str = "/api"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    default_method: Literal[
        "nearest-neighbor",
        "two-opt",
        "genetic-algorithm",
        "simulated-annealing",
        "a-star",
        "brute-force",
        "best",
    ] = Field(default="best", description="Method used when a request does not name one.")
    max_points_per_request: int = Field(default=500, ge=2)

    two_opt_max_iterations: int = Field(default=100, ge=1)
    ga_population_size: int = Field(default=50, ge=2)
    ga_generations: int = Field(default=100, ge=0)
    ga_tournament_size: int = Field(default=5, ge=3, le=5)
    ga_crossover_rate: float = Field(default=0.8, ge=0.0, le=1.0)
    ga_mutation_rate: float = Field(default=0.2, ge=0.0, le=1.0)
    sa_initial_temperature: float = Field(default=1000.0, gt=0.0)
    sa_cooling_rate: float = Field(default=0.995, gt=0.0, lt=1.0)
    sa_iterations: int = Field(default=10000, ge=0)
    brute_force_max_points: int = Field(
        default=10,
        ge=2,
        description="Largest instance solved by exhaustive search; larger ones fall back to nearest neighbor.",
    )

    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the metaheuristics' random source. Unseeded when not set.",
    )
    max_runtime_seconds: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Wall-clock budget per optimization; the best tour so far is returned when it runs out.",
    )
    parallel_selection: bool = Field(
        default=False,
        description="Run the best-of-all candidates on worker threads.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
