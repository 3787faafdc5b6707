# Path: bom_pivot/loaders/__init__.py
"""
bom_pivot Loaders Package

INPUT layer: everything read from disk before the engine runs.

Data Sources:
    - dimension config: dictionary/dimensions.yaml (YAML, validated by pydantic)
    - records: dimension and fact records (JSON, NDJSON, CSV)

Example:
    from loaders import DimensionConfigLoader, read_records, correlation_map

    definitions = DimensionConfigLoader().load_all()
    records = read_records('le_dimension.json')
    correlation = correlation_map(definitions)
"""

from loaders.dimension_models import DimensionDefinition
from loaders.dimension_loader import DimensionConfigLoader, correlation_map
from loaders.record_reader import RecordReadError, detect_format, read_records

__all__ = [
    'DimensionDefinition',
    'DimensionConfigLoader',
    'correlation_map',
    'RecordReadError',
    'detect_format',
    'read_records',
]
