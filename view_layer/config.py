import json
from functools import cached_property
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from view_layer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # repository root

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """View layer settings with validation.

    Values come from ``VIEW_*`` environment variables or the ``.env`` file.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator decorator
    - @cached_property for the template map file
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="", description="Directory for JSON logs (empty = <repo>/logs)")

    # Template resolution
    template_paths: str = Field(
        default=str(BASE_DIR / "templates"),
        description="Comma separated template directories, searched last-first",
    )
    template_suffix: str = Field(default="html", description="Suffix appended to bare template names")
    template_map_file: str = Field(default="", description="Optional JSON file mapping template names to paths")

    # Rendering
    json_merge_unnamed_children: bool = Field(
        default=False, description="Merge uncaptured child models into their parent in JSON output"
    )
    server_url_use_proxy: bool = Field(default=False, description="Trust X-Forwarded-* headers for server URLs")

    trusted_hosts: str = Field(default="localhost,127.0.0.1,testserver", description="Comma separated hosts")

    model_config = SettingsConfigDict(
        env_prefix="VIEW_",
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @cached_property
    def template_directories(self) -> list[Path]:
        """Template directories in the order they are pushed onto the path stack."""
        return [Path(p.strip()) for p in self.template_paths.split(",") if p.strip()]

    @cached_property
    def template_map(self) -> dict[str, str]:
        """Load the template map file once per Settings instance.

        Relative paths in the file are resolved against the repository root.

        Returns:
            Mapping of template name to template path

        Raises:
            ValueError: If the file contains invalid JSON or is not an object
        """
        if not self.template_map_file:
            return {}

        file_path = Path(self.template_map_file)
        if not file_path.is_absolute():
            file_path = BASE_DIR / file_path

        if not file_path.exists():
            log_with_context(
                logger,
                "warning",
                "Template map file not found, using empty map",
                file_path=str(file_path),
                event_type="config_template_map_missing",
            )
            return {}

        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            log_with_context(
                logger,
                "error",
                "Invalid JSON in template map file",
                file_path=str(file_path),
                error=str(e),
                event_type="config_template_map_invalid",
            )
            raise ValueError(f"{file_path.name} contains invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"{file_path.name} must contain a JSON object")

        resolved = {}
        for name, path in data.items():
            template_path = Path(path)
            if not template_path.is_absolute():
                template_path = BASE_DIR / template_path
            resolved[name] = str(template_path)
        return resolved

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a logging level."""
        v = v.strip().upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return v

    @field_validator("template_suffix", mode="after")
    @classmethod
    def validate_template_suffix(cls, v: str) -> str:
        """Strip whitespace and any leading dot from the template suffix."""
        v = v.strip().lstrip(".")
        if not v:
            raise ValueError("template_suffix must not be empty")
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
