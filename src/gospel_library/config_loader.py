"""
Configuration loader with validation.
"""
from dotenv import load_dotenv

from .config import GospelLibraryConfig
from .config_validator import get_bool_env, get_int_env, get_optional_env, validate_path


def load_config_from_env(require_db: bool = False) -> GospelLibraryConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        service = GospelLibraryService(SQLiteLibraryStore(config.db_path), config)

    :param require_db: Fail early if the database file does not exist
    :return: Validated GospelLibraryConfig instance
    :raises: ConfigurationError if values are invalid
    """
    # Load .env file if it exists (for local development)
    load_dotenv()

    defaults = GospelLibraryConfig()
    config = GospelLibraryConfig(
        db_path=get_optional_env("GOSPEL_DB_PATH", default=defaults.db_path),
        debug=get_bool_env("GOSPEL_DEBUG"),
        max_verse_range=get_int_env("GOSPEL_MAX_VERSE_RANGE", defaults.max_verse_range),
        default_limit=get_int_env("GOSPEL_DEFAULT_LIMIT", defaults.default_limit),
        max_limit=get_int_env("GOSPEL_MAX_LIMIT", defaults.max_limit),
        max_query_length=get_int_env("GOSPEL_MAX_QUERY_LENGTH", defaults.max_query_length),
        talk_truncate_chars=get_int_env("GOSPEL_TALK_TRUNCATE_CHARS", defaults.talk_truncate_chars),
    )

    if require_db:
        validate_path(config.db_path, "GOSPEL_DB_PATH", must_exist=True)

    return config
