"""Configuration management for Tally.

Reads configuration from ~/.config/tally.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    holidays_file: Path
    forecast_granularity: str = "monthly"
    forecast_periods: int = 12
    enable_reset: bool = False

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "tally"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="tally.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            holidays_file=get_seed_dir() / "holidays.yaml",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tally.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def get_seed_dir() -> Path:
    """Get the path to the bundled seed data directory."""
    return Path(__file__).parent / "db" / "seed"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "tally"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "tally.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    calendar_config = data.get("calendar", {})
    holidays_file = Path(
        calendar_config.get("holidays_file", get_seed_dir() / "holidays.yaml")
    )

    forecast_config = data.get("forecast", {})
    forecast_granularity = forecast_config.get("granularity", "monthly")
    forecast_periods = int(forecast_config.get("periods", 12))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        holidays_file=holidays_file,
        forecast_granularity=forecast_granularity,
        forecast_periods=forecast_periods,
        enable_reset=bool(data.get("enable_reset", False)),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "enable_reset": config.enable_reset,
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "calendar": {
            "holidays_file": str(config.holidays_file),
        },
        "forecast": {
            "granularity": config.forecast_granularity,
            "periods": config.forecast_periods,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
