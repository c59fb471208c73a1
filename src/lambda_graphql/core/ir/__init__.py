"""
lambda-graphql Intermediate Representation (IR) types.

The IR is the structured, language-neutral description of declared types and
operations. The loader (or any external extractor) builds it; the SDL and
manifest generators read it. All models are frozen.
"""

from .directives import (
    AppliedDirective,
    AuthMode,
    DirectiveValue,
    auth_directive,
)
from .operations import (
    ROOT_TYPE_ORDER,
    ArgumentSpec,
    DataSourceSpec,
    DeploymentSpec,
    OperationSpec,
    ResolverKind,
    RootType,
)
from .schema import SchemaSpec
from .types import (
    EnumValueSpec,
    FieldSpec,
    TypeKind,
    TypeSpec,
)

__all__ = [
    # Directives
    "AppliedDirective",
    "AuthMode",
    "DirectiveValue",
    "auth_directive",
    # Types
    "EnumValueSpec",
    "FieldSpec",
    "TypeKind",
    "TypeSpec",
    # Operations
    "ROOT_TYPE_ORDER",
    "ArgumentSpec",
    "DataSourceSpec",
    "DeploymentSpec",
    "OperationSpec",
    "ResolverKind",
    "RootType",
    # Snapshot
    "SchemaSpec",
]
