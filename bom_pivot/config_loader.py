# Path: bom_pivot/config_loader.py
"""
Configuration Loader for bom_pivot

Loads configuration from a .env file for the hierarchical pivot engine.
Singleton pattern ensures consistent configuration across all components.

Every setting has a default, so the engine runs without a .env file;
the .env file (or the process environment) only overrides them.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Hierarchy Defaults
DEFAULT_PATH_SEPARATOR: str = '//'
DEFAULT_ROOT_FALLBACK_LABEL: str = 'All'

# Composition Defaults
DEFAULT_COMPOSITE_ID_DELIMITER: str = '|'
DEFAULT_COMPOSITE_WARNING_THRESHOLD: int = 10000

# Mapping verification
DEFAULT_VERIFY_SAMPLE_SIZE: int = 10


class ConfigLoader:
    """
    Singleton configuration loader for bom_pivot.

    Loads configuration from environment variables with type
    conversion and defaults.

    Example:
        config = ConfigLoader()
        delimiter = config.get('composite_id_delimiter')  # '|'
        threshold = config.get('composite_warning_threshold')  # int
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads the .env file
        that sits next to this module, if there is one.
        """
        if ConfigLoader._initialized:
            return

        env_path = Path(__file__).resolve().parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        program_dir = Path(__file__).resolve().parent

        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('BOM_PIVOT_ENVIRONMENT', 'development'),
            'debug': self._get_bool('BOM_PIVOT_DEBUG', False),

            # ================================================================
            # PATHS
            # ================================================================
            'program_dir': program_dir,
            'data_root': self._get_path('BOM_PIVOT_DATA_ROOT'),
            'dimensions_file': (
                self._get_path('BOM_PIVOT_DIMENSIONS_FILE')
                or program_dir / 'dictionary' / 'dimensions.yaml'
            ),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('BOM_PIVOT_LOG_DIR'),
            'log_level': self._get_env('BOM_PIVOT_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('BOM_PIVOT_LOG_CONSOLE', True),

            # ================================================================
            # HIERARCHY CONFIGURATION
            # ================================================================
            'path_separator': self._get_env(
                'BOM_PIVOT_PATH_SEPARATOR', DEFAULT_PATH_SEPARATOR
            ),
            'root_fallback_label': self._get_env(
                'BOM_PIVOT_ROOT_FALLBACK_LABEL', DEFAULT_ROOT_FALLBACK_LABEL
            ),

            # ================================================================
            # COMPOSITION CONFIGURATION
            # ================================================================
            'composite_id_delimiter': self._get_env(
                'BOM_PIVOT_COMPOSITE_ID_DELIMITER', DEFAULT_COMPOSITE_ID_DELIMITER
            ),
            'composite_warning_threshold': self._get_int(
                'BOM_PIVOT_COMPOSITE_WARNING_THRESHOLD',
                DEFAULT_COMPOSITE_WARNING_THRESHOLD
            ),

            # ================================================================
            # MAPPING VERIFICATION
            # ================================================================
            'verify_sample_size': self._get_int(
                'BOM_PIVOT_VERIFY_SAMPLE_SIZE', DEFAULT_VERIFY_SAMPLE_SIZE
            ),
            'min_coverage_percent': self._get_float(
                'BOM_PIVOT_MIN_COVERAGE_PERCENT', 0.0
            ),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name
            required: If True, raise error when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"dimensions_file={self._config.get('dimensions_file')})"
        )


__all__ = ['ConfigLoader']
