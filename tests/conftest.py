"""Shared pytest fixtures for lambda-graphql tests."""

from datetime import datetime
from pathlib import Path

import pytest
import yaml

from lambda_graphql.core import ir

FIXED_TIME = datetime(2024, 1, 15, 10, 30, 0)


@pytest.fixture
def fixed_time() -> datetime:
    """Return a fixed manifest timestamp."""
    return FIXED_TIME


@pytest.fixture
def product_type() -> ir.TypeSpec:
    """Return the Product object type."""
    return ir.TypeSpec(
        name="Product",
        description="A product in the catalog",
        fields=[
            ir.FieldSpec(name="id", type="ID", is_nullable=False),
            ir.FieldSpec(name="name", type="String", is_nullable=False),
            ir.FieldSpec(name="createdAt", type="AWSDateTime", is_nullable=False),
        ],
    )


@pytest.fixture
def get_product_operation() -> ir.OperationSpec:
    """Return the getProduct query backed by ProductsLambda."""
    return ir.OperationSpec(
        root_type=ir.RootType.QUERY,
        field_name="getProduct",
        return_type="Product",
        arguments=[ir.ArgumentSpec(name="id", type="ID")],
        data_source="ProductsLambda",
        deployment=ir.DeploymentSpec(
            lambda_function_name="GetProduct",
            lambda_function_logical_id="GetProductFunction",
        ),
    )


@pytest.fixture
def product_schema(
    product_type: ir.TypeSpec, get_product_operation: ir.OperationSpec
) -> ir.SchemaSpec:
    """Return a small catalog schema with an enum, a union and three operations."""
    return ir.SchemaSpec(
        types=[
            product_type,
            ir.TypeSpec(
                name="ProductStatus",
                kind=ir.TypeKind.ENUM,
                enum_values=[
                    ir.EnumValueSpec(name="ACTIVE"),
                    ir.EnumValueSpec(name="ARCHIVED"),
                ],
            ),
            ir.TypeSpec(
                name="CreateProductInput",
                kind=ir.TypeKind.INPUT,
                fields=[ir.FieldSpec(name="name", type="String", is_nullable=False)],
            ),
        ],
        operations=[
            get_product_operation,
            ir.OperationSpec(
                root_type=ir.RootType.QUERY,
                field_name="listProducts",
                return_type="[Product]!",
                data_source="ProductsLambda",
                deployment=ir.DeploymentSpec(lambda_function_logical_id="GetProductFunction"),
            ),
            ir.OperationSpec(
                root_type=ir.RootType.MUTATION,
                field_name="createProduct",
                return_type="Product!",
                arguments=[ir.ArgumentSpec(name="input", type="CreateProductInput")],
                resolver_kind=ir.ResolverKind.PIPELINE,
                functions=["ValidateProduct", "SaveProduct"],
            ),
        ],
    )


@pytest.fixture
def product_document() -> dict:
    """Return an IR document describing the catalog API."""
    return {
        "description": "Catalog API",
        "types": [
            {
                "name": "Product",
                "fields": [
                    {"name": "id", "type": "ID", "is_nullable": False},
                    {"name": "name", "source": {"name": "System.String", "non_null": True}},
                    {"name": "createdAt", "source": {"name": "System.DateTime"}},
                    {"name": "price", "source": {"name": "System.Decimal"}},
                    {
                        "name": "tags",
                        "source": {
                            "name": "System.Collections.Generic.List",
                            "is_collection": True,
                            "type_arguments": [{"name": "System.String"}],
                        },
                    },
                ],
            },
            {
                "name": "ProductStatus",
                "kind": "enum",
                "enum_values": [{"name": "ACTIVE"}, {"name": "ARCHIVED"}],
            },
        ],
        "operations": [
            {
                "root_type": "Query",
                "field_name": "getProduct",
                "source_return": {
                    "name": "System.Threading.Tasks.Task",
                    "type_arguments": [{"name": "MyApp.Models.Product", "non_null": True}],
                },
                "arguments": [{"name": "id", "type": "ID"}],
                "data_source": "ProductsLambda",
                "deployment": {
                    "lambda_function_name": "GetProduct",
                    "lambda_function_logical_id": "GetProductFunction",
                },
            },
            {
                "root_type": "Mutation",
                "field_name": "archiveProduct",
                "source_return": {"name": "System.Threading.Tasks.Task"},
                "arguments": [{"name": "id", "type": "ID"}],
                "data_source": "ProductsLambda",
                "deployment": {"lambda_function_logical_id": "GetProductFunction"},
            },
        ],
    }


@pytest.fixture
def ir_file(tmp_path: Path, product_document: dict) -> Path:
    """Write the catalog IR document to a temporary YAML file."""
    path = tmp_path / "api.yaml"
    path.write_text(yaml.safe_dump(product_document, sort_keys=False))
    return path
