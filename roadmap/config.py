import os
import sys
from dataclasses import dataclass

from roadmap.utils.constants import DEFAULT_STATUS


class ConfigValidationError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass(frozen=True)
class Config:
    notion_token: str
    database_id: str

    # Optional rich_text property used to narrow a query to one item.
    # When empty, items are looked up by their Notion page id.
    id_property: str = ""

    default_status: str = DEFAULT_STATUS

    # Remote /api/roadmap used by the UI pages; empty means in-process.
    api_base_url: str = ""

    port: int = 8080

    def missing(self) -> list[str]:
        """Names of required environment variables that are not set."""
        missing = []
        if not self.notion_token:
            missing.append("NOTION_API_KEY")
        if not self.database_id:
            missing.append("NOTION_DATABASE_ID")
        return missing


def _validate_config(config: Config) -> None:
    """Validate configuration and raise ConfigValidationError if invalid."""
    errors = [f"{name} environment variable is not set" for name in config.missing()]

    if config.database_id and len(config.database_id.replace("-", "")) != 32:
        errors.append("NOTION_DATABASE_ID appears to be invalid (should be a UUID)")

    if not config.default_status:
        errors.append("ROADMAP_DEFAULT_STATUS must not be empty")

    if config.port <= 0:
        errors.append(f"PORT must be positive (got {config.port})")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def load_config(validate: bool = True) -> Config:
    """
    Load configuration from environment variables.

    Args:
        validate: If True, validate configuration and fail fast on errors

    Raises:
        SystemExit: If validate=True and configuration is invalid
    """
    notion_token = (os.getenv("NOTION_API_KEY") or os.getenv("NOTION_TOKEN", "")).strip()
    database_id = os.getenv("NOTION_DATABASE_ID", "").strip()
    id_property = os.getenv("NOTION_ID_PROPERTY", "").strip()
    default_status = os.getenv("ROADMAP_DEFAULT_STATUS", DEFAULT_STATUS).strip()
    api_base_url = os.getenv("ROADMAP_API_URL", "").strip().rstrip("/")

    try:
        port = int(os.getenv("PORT", "8080"))
    except ValueError:
        print("ERROR: PORT must be an integer", file=sys.stderr)
        sys.exit(1)

    config = Config(
        notion_token=notion_token,
        database_id=database_id,
        id_property=id_property,
        default_status=default_status,
        api_base_url=api_base_url,
        port=port,
    )

    if validate:
        try:
            _validate_config(config)
        except ConfigValidationError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            print("\nPlease check your environment variables and ensure all required variables are set.", file=sys.stderr)
            sys.exit(1)

    return config
