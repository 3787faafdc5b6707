# Path: bom_pivot/loaders/dimension_models.py
"""
Dimension Definition Model

Pydantic model describing one pivot dimension: where its path, leaf id
and leaf label live in the dimension records, and which fact field
correlates with its leaves. New dimensions are added as data in
dictionary/dimensions.yaml, not as code.
"""

from typing import Optional
from pydantic import BaseModel, Field


class DimensionDefinition(BaseModel):
    """Field layout of one dimension's records."""
    key: str = Field(
        min_length=1,
        description="Unique dimension key (e.g. 'le', 'cost_element')"
    )
    label: str = Field(
        description="Human label, used for the synthesized root label"
    )
    path_field: Optional[str] = Field(
        default=None,
        description="Record field holding the delimited path; absent means flat"
    )
    leaf_id_field: str = Field(
        min_length=1,
        description="Record field holding the leaf's fact id"
    )
    leaf_display_field: Optional[str] = Field(
        default=None,
        description="Record field holding the leaf's display label"
    )
    separator: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Path segment separator; unset uses the configured one"
    )
    fact_field: str = Field(
        min_length=1,
        description="Fact record field correlated with the leaf ids"
    )
    root_label: Optional[str] = Field(
        default=None,
        description="Explicit root label override"
    )
    hierarchical: bool = Field(
        default=True,
        description="False forces a flat, one-level hierarchy"
    )

    @property
    def is_flat(self) -> bool:
        """True when the dimension can only be built flat."""
        return not self.hierarchical or not self.path_field


__all__ = ['DimensionDefinition']
