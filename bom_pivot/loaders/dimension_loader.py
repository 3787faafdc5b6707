# Path: bom_pivot/loaders/dimension_loader.py
"""
Dimension Config Loader

Loads dimension definitions from a YAML file and validates them into
DimensionDefinition models.

File layout:
    dimensions:
      - key: le
        label: Legal Entities
        path_field: PATH
        leaf_id_field: LE
        fact_field: LE
"""

from pathlib import Path
from typing import Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from constants import DimensionConfigKeys
from dictionary import DIMENSIONS_FILE
from core.logger import get_input_logger
from loaders.dimension_models import DimensionDefinition

logger = get_input_logger('dimension_loader')


class DimensionConfigLoader:
    """
    Loads dimension definitions from YAML.

    Invalid entries are logged and skipped; a missing file yields no
    definitions.

    Example:
        loader = DimensionConfigLoader(Path('dictionary/dimensions.yaml'))
        definitions = loader.load_all()
        le = definitions['le']
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize dimension config loader.

        Args:
            config_path: Path to the YAML file.
                         Defaults to dictionary/dimensions.yaml
        """
        self.config_path = Path(config_path) if config_path is not None else DIMENSIONS_FILE

        self._cache: Optional[dict[str, DimensionDefinition]] = None

    def load_all(self, use_cache: bool = True) -> dict[str, DimensionDefinition]:
        """
        Load all dimension definitions.

        Args:
            use_cache: Whether to use cached results

        Returns:
            Dictionary mapping dimension key to DimensionDefinition

        Raises:
            yaml.YAMLError: If the file is not valid YAML
        """
        if use_cache and self._cache is not None:
            return self._cache

        definitions: dict[str, DimensionDefinition] = {}

        if not self.config_path.exists():
            logger.warning(f"Dimension config not found: {self.config_path}")
            return definitions

        with open(self.config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        entries = (data or {}).get(DimensionConfigKeys.DIMENSIONS) or []
        for index, entry in enumerate(entries):
            definition = self.parse_entry(entry, index)
            if definition is None:
                continue
            if definition.key in definitions:
                logger.warning(f"Duplicate dimension key: {definition.key}")
            definitions[definition.key] = definition

        logger.info(f"Loaded {len(definitions)} dimension definitions from {self.config_path}")
        self._cache = definitions
        return definitions

    def parse_entry(self, entry: object, index: int = 0) -> Optional[DimensionDefinition]:
        """
        Validate one raw YAML entry.

        Returns:
            DimensionDefinition, or None if the entry is invalid
        """
        if not isinstance(entry, dict):
            logger.error(f"Dimension entry {index} is not a mapping")
            return None
        try:
            return DimensionDefinition(**entry)
        except ValidationError as e:
            logger.error(f"Invalid dimension entry {index} ({entry.get('key')}): {e}")
            return None

    def get(self, key: str) -> DimensionDefinition:
        """
        Get one definition by key.

        Raises:
            KeyError: If no such dimension is configured
        """
        definitions = self.load_all()
        if key not in definitions:
            raise KeyError(f"Unknown dimension: {key}")
        return definitions[key]


def correlation_map(
    definitions: Union[Mapping[str, DimensionDefinition], list[DimensionDefinition]],
) -> dict[str, str]:
    """
    Dimension key -> correlated fact field.

    Example:
        >>> correlation_map(definitions)['le']
        'LE'
    """
    if isinstance(definitions, Mapping):
        definitions = definitions.values()
    return {definition.key: definition.fact_field for definition in definitions}


__all__ = ['DimensionConfigLoader', 'correlation_map']
