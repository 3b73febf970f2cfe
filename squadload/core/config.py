"""
Library configuration using Pydantic Settings.

Loads configuration from environment variables (``SQUADLOAD_`` prefix) or a
``.env`` file.  The services translate these values into the per-algorithm
config models (``ACWRConfig``, ``EWMAConfig`` ...) so every algorithm can
still be driven by an explicit config in tests.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Analytics settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "squadload — athlete workload analytics and grouping engine"
    VERSION: str = "0.1.0"

    # Entropy
    RANDOM_SEED: int = 42
    PROFILE_JITTER: bool = True

    # Clustering
    KMEANS_MAX_ITERATIONS: int = 100
    KMEANS_CONVERGENCE_THRESHOLD: float = 0.001
    DEFAULT_CLUSTER_COUNT: int = 4

    # Workload history
    HISTORY_RETENTION_DAYS: int = 90

    # EWMA
    EWMA_ALPHA: float = 0.2
    EWMA_BASELINE: float = 50.0
    FORECAST_NOISE: bool = True

    # Recovery
    FATIGUE_VARIATION: float = 0.0
    RECOVERY_VARIABILITY: float = 0.3

    model_config = SettingsConfigDict(env_prefix="SQUADLOAD_", env_file=".env", case_sensitive=True,
                                      extra="ignore")


# Global settings instance
settings = Settings()
