"""Configuration dataclasses for photofx."""

from dataclasses import dataclass, field


@dataclass
class OutputConfig:
    """Configuration for written images."""

    directory: str = "."
    suffix: str = ".png"
    quality: int = 90


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = "INFO"
    json: bool = False


@dataclass
class ProcessingConfig:
    """Combined configuration for processing."""

    input_paths: list[str]
    query: str
    output: OutputConfig
    logging: LoggingConfig
    max_dimension: int = 0
    settings: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_args(
        cls,
        input_paths: list[str],
        query: str,
        output_dir: str = ".",
        suffix: str = ".png",
        quality: int = 90,
        max_dimension: int = 0,
        settings: dict[str, dict[str, str]] | None = None,
        # Logging config
        log_level: str = "INFO",
        log_json: bool = False,
    ) -> "ProcessingConfig":
        """Create ProcessingConfig from CLI arguments."""
        return cls(
            input_paths=list(input_paths),
            query=query.lstrip("?"),
            output=OutputConfig(directory=output_dir, suffix=suffix, quality=quality),
            logging=LoggingConfig(level=log_level, json=log_json),
            max_dimension=max_dimension,
            settings={name: dict(values) for name, values in (settings or {}).items()},
        )
