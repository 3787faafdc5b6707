# Path: bom_pivot/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for bom_pivot

Provides common test fixtures used across all test modules.
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add bom_pivot to path for imports
BOM_PIVOT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(BOM_PIVOT_ROOT))
sys.path.insert(0, str(Path(__file__).parent / 'fixtures'))

from sample_data import (
    create_scenario_records,
    create_le_records,
    create_cost_element_records,
    create_year_records,
    create_fact_records,
)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'BOM_PIVOT_ENVIRONMENT': 'test',
        'BOM_PIVOT_DEBUG': 'true',

        # Paths
        'BOM_PIVOT_DATA_ROOT': '/tmp/bom_pivot_test/data',
        'BOM_PIVOT_LOG_DIR': '/tmp/bom_pivot_test/logs',

        # Logging
        'BOM_PIVOT_LOG_LEVEL': 'DEBUG',
        'BOM_PIVOT_LOG_CONSOLE': 'false',

        # Engine
        'BOM_PIVOT_PATH_SEPARATOR': '//',
        'BOM_PIVOT_COMPOSITE_ID_DELIMITER': '|',
        'BOM_PIVOT_ROOT_FALLBACK_LABEL': 'All',
        'BOM_PIVOT_COMPOSITE_WARNING_THRESHOLD': '500',

        # Mapping verification
        'BOM_PIVOT_VERIFY_SAMPLE_SIZE': '5',
        'BOM_PIVOT_MIN_COVERAGE_PERCENT': '90.5',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# SAMPLE DATA FIXTURES
# ==============================================================================

@pytest.fixture
def scenario_records():
    """Three legal entity records: NA//US//CA, NA//US//TX, EU//FR."""
    return create_scenario_records()


@pytest.fixture
def le_records():
    """Legal entity records under a single top-level segment."""
    return create_le_records()


@pytest.fixture
def cost_element_records():
    """Cost element records with mixed-case, numbered labels."""
    return create_cost_element_records()


@pytest.fixture
def year_records():
    """Flat business year records."""
    return create_year_records()


@pytest.fixture
def fact_records():
    """Fact records correlated with the scenario and year dimensions."""
    return create_fact_records()


@pytest.fixture
def sample_definitions():
    """Dimension definitions for the sample records."""
    from loaders.dimension_models import DimensionDefinition

    return {
        'le': DimensionDefinition(
            key='le',
            label='Legal Entities',
            path_field='PATH',
            leaf_id_field='ID',
            fact_field='LE',
        ),
        'cost_element': DimensionDefinition(
            key='cost_element',
            label='Cost Elements',
            path_field='PATH',
            leaf_id_field='COST_ELEMENT',
            leaf_display_field='DESC',
            fact_field='COST_ELEMENT',
        ),
        'year': DimensionDefinition(
            key='year',
            label='Business Years',
            leaf_id_field='YEAR',
            fact_field='ZYEAR',
            hierarchical=False,
        ),
    }


@pytest.fixture
def dimensions_yaml(temp_dir):
    """Write a small dimension config file and return its path."""
    content = """
dimensions:
  - key: le
    label: Legal Entities
    path_field: PATH
    leaf_id_field: ID
    fact_field: LE
  - key: year
    label: Business Years
    leaf_id_field: YEAR
    fact_field: ZYEAR
    hierarchical: false
"""
    path = temp_dir / 'dimensions.yaml'
    path.write_text(content, encoding='utf-8')
    return path


@pytest.fixture
def scenario_file(temp_dir, scenario_records):
    """Scenario records written as JSON."""
    path = temp_dir / 'le.json'
    with open(path, 'w') as f:
        json.dump(scenario_records, f, indent=2)
    return path


@pytest.fixture
def facts_file(temp_dir, fact_records):
    """Fact records written as NDJSON."""
    path = temp_dir / 'facts.ndjson'
    with open(path, 'w') as f:
        for record in fact_records:
            f.write(json.dumps(record) + '\n')
    return path


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

@pytest.fixture
def mock_config():
    """Create a mock ConfigLoader for testing."""
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {
        'environment': 'test',
        'debug': True,
        'dimensions_file': Path('/tmp/test/dimensions.yaml'),
        'log_dir': None,
        'log_console': False,
        'path_separator': '//',
        'root_fallback_label': 'All',
        'composite_id_delimiter': '|',
        'composite_warning_threshold': 10000,
        'verify_sample_size': 10,
        'min_coverage_percent': 0.0,
    }.get(key, default)
    return config


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def reset_singletons():
    """Reset the ConfigLoader singleton between tests."""
    from config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
