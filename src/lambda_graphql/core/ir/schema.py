"""
The merged IR snapshot handed to the generators.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .operations import ROOT_TYPE_ORDER, OperationSpec, RootType
from .types import TypeSpec


class SchemaSpec(BaseModel):
    """
    Complete, deduplicated IR for one generation run.

    Attributes:
        types: Named non-root types (names must be unique)
        operations: Root operation fields with their resolvers
        description: Optional schema-level description
    """

    types: list[TypeSpec] = Field(default_factory=list)
    operations: list[OperationSpec] = Field(default_factory=list)
    description: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_unique_names(self) -> SchemaSpec:
        seen: set[str] = set()
        for type_spec in self.types:
            if type_spec.name in seen:
                raise ValueError(f"Duplicate type name '{type_spec.name}'")
            if type_spec.name in {root.value for root in RootType}:
                raise ValueError(f"Type name '{type_spec.name}' is reserved for a root type")
            seen.add(type_spec.name)

        fields: set[str] = set()
        for op in self.operations:
            if op.qualified_name in fields:
                raise ValueError(f"Duplicate operation '{op.qualified_name}'")
            fields.add(op.qualified_name)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.types and not self.operations

    @property
    def root_types(self) -> list[RootType]:
        """Root types that have at least one operation, in schema order."""
        present = {op.root_type for op in self.operations}
        return [root for root in ROOT_TYPE_ORDER if root in present]
