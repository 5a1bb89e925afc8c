from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_file_size_bytes: int = 50 * 1024 * 1024
    max_files: int = 10
    max_name_length: int = 100
    allowed_extensions: list[str] = [
        "step",
        "stp",
        "stl",
        "iges",
        "igs",
        "dwg",
        "dxf",
        "obj",
        "ply",
        "3mf",
    ]
    large_batch_warning_bytes: int = 100 * 1024 * 1024
    error_delimiter: str = "; "

    upload_chunk_bytes: int = 1024 * 1024
    upload_delay_min_ms: int = 100
    upload_delay_max_ms: int = 300
    step_delay_min_ms: int = 500
    step_delay_max_ms: int = 1500
    quote_delay_ms: int = 1000

    random_seed: int | None = None

    optimization_savings_rate: float = 0.3
    process_savings_rate: float = 0.2
    market_price_multiplier: float = 2.0
