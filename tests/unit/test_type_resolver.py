"""Tests for source type and return type resolution."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from lambda_graphql.core.type_resolver import (
    ResolvedType,
    ReturnTypeResolver,
    SourceType,
    TypeNameCache,
    TypeResolver,
)


def _list_of(element: SourceType, **kwargs) -> SourceType:
    return SourceType(
        name="System.Collections.Generic.List",
        is_collection=True,
        type_arguments=(element,),
        **kwargs,
    )


def _nullable(underlying: SourceType) -> SourceType:
    return SourceType(name="System.Nullable", is_nullable_wrapper=True, type_arguments=(underlying,))


def _task(*args: SourceType) -> SourceType:
    return SourceType(name="System.Threading.Tasks.Task", type_arguments=args)


PRODUCT = SourceType(name="MyApp.Models.Product")


@pytest.fixture
def resolver() -> TypeResolver:
    return TypeResolver()


class TestTypeResolver:
    """Tests for TypeResolver precedence and nullability."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("System.String", "String"),
            ("System.Int32", "Int"),
            ("System.Int64", "Int"),
            ("System.Double", "Float"),
            ("System.Decimal", "Float"),
            ("System.Boolean", "Boolean"),
            ("System.Guid", "ID"),
            ("builtins.str", "String"),
            ("bool", "Boolean"),
        ],
    )
    def test_primitives(self, resolver: TypeResolver, name: str, expected: str):
        assert resolver.resolve(SourceType(name=name)).name == expected

    def test_user_type_uses_simple_name(self, resolver: TypeResolver):
        assert resolver.resolve(PRODUCT) == ResolvedType("Product", True)

    def test_value_types_are_non_null(self, resolver: TypeResolver):
        assert resolver.resolve(SourceType(name="System.Int32")).format() == "Int!"
        assert resolver.resolve(SourceType(name="System.DateTime")).format() == "AWSDateTime!"

    def test_reference_types_are_nullable(self, resolver: TypeResolver):
        assert resolver.resolve(SourceType(name="System.String")).format() == "String"

    def test_non_null_annotation(self, resolver: TypeResolver):
        source = SourceType(name="System.String", non_null=True)
        assert resolver.resolve(source).format() == "String!"

    def test_nullable_wrapper_forces_nullable(self, resolver: TypeResolver):
        resolved = resolver.resolve(_nullable(SourceType(name="System.DateTime")))
        assert resolved == ResolvedType("AWSDateTime", True)

    def test_is_value_type_override(self, resolver: TypeResolver):
        money = SourceType(name="MyApp.Money", is_value_type=True)
        assert resolver.resolve(money).format() == "Money!"

    def test_scalar_override_wins(self, resolver: TypeResolver):
        source = SourceType(name="System.Int64", scalar_override="AWSTimestamp")
        assert resolver.resolve(source).format() == "AWSTimestamp!"

    def test_registry_before_primitives(self, resolver: TypeResolver):
        assert resolver.resolve(SourceType(name="System.Guid")).name == "ID"
        assert resolver.resolve(SourceType(name="System.Uri")).name == "AWSURL"

    def test_dictionary_is_json(self, resolver: TypeResolver):
        source = SourceType(
            name="System.Collections.Generic.Dictionary",
            is_dictionary=True,
            type_arguments=(SourceType(name="System.String"), SourceType(name="System.Int32")),
        )
        assert resolver.resolve(source) == ResolvedType("AWSJSON", True)

    def test_collection_of_user_type(self, resolver: TypeResolver):
        assert resolver.resolve(_list_of(PRODUCT)).format() == "[Product]"

    def test_collection_nullability_is_independent(self, resolver: TypeResolver):
        """Only the outer type carries the non-null suffix."""
        source = _list_of(SourceType(name="System.Int32"), non_null=True)
        assert resolver.resolve(source).format() == "[Int]!"

    def test_nested_collections(self, resolver: TypeResolver):
        assert resolver.resolve(_list_of(_list_of(PRODUCT))).name == "[[Product]]"

    def test_collection_without_element_raises(self, resolver: TypeResolver):
        with pytest.raises(ValueError, match="no type arguments"):
            resolver.resolve(SourceType(name="System.Array", is_collection=True))

    def test_is_nullable_ignores_shape_of_inner(self, resolver: TypeResolver):
        assert resolver.is_nullable(_list_of(SourceType(name="System.Int32"))) is True


class TestTypeNameCache:
    """Tests for the shared type-name cache."""

    def test_hits_and_misses(self):
        cache = TypeNameCache()
        resolver = TypeResolver(cache=cache)

        resolver.resolve(PRODUCT)
        resolver.resolve(PRODUCT)
        resolver.resolve(SourceType(name="System.Int32"))

        assert cache.misses == 2
        assert cache.hits == 1
        assert len(cache) == 2

    def test_clear(self):
        cache = TypeNameCache()
        TypeResolver(cache=cache).resolve(PRODUCT)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0

    def test_annotations_are_part_of_the_key(self):
        cache = TypeNameCache()
        resolver = TypeResolver(cache=cache)

        assert resolver.resolve(SourceType(name="System.String")).format() == "String"
        assert resolver.resolve(SourceType(name="System.String", non_null=True)).format() == "String!"
        assert len(cache) == 2

    def test_concurrent_resolution(self):
        cache = TypeNameCache()
        resolver = TypeResolver(cache=cache)
        sources = [
            PRODUCT,
            SourceType(name="System.Int32"),
            _list_of(PRODUCT),
            _nullable(SourceType(name="System.DateTime")),
        ]
        expected = [TypeResolver().resolve(s) for s in sources]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda i: resolver.resolve(sources[i % 4]), range(400)))

        assert results == [expected[i % 4] for i in range(400)]
        assert len(cache) == 4
        assert cache.hits + cache.misses == 400


class TestReturnTypeResolver:
    """Tests for operation return type resolution."""

    @pytest.fixture
    def returns(self) -> ReturnTypeResolver:
        return ReturnTypeResolver()

    def test_task_is_unwrapped(self, returns: ReturnTypeResolver):
        source = _task(SourceType(name="MyApp.Models.Product", non_null=True))
        assert returns.resolve(source) == "Product!"

    def test_plain_task_is_boolean(self, returns: ReturnTypeResolver):
        assert returns.resolve(_task()) == "Boolean!"

    def test_void_is_boolean(self, returns: ReturnTypeResolver):
        assert returns.resolve(SourceType(name="System.Void")) == "Boolean!"
        assert returns.resolve(SourceType(name="None")) == "Boolean!"

    def test_coroutine_result_is_last_argument(self, returns: ReturnTypeResolver):
        source = SourceType(
            name="typing.Coroutine",
            type_arguments=(
                SourceType(name="typing.Any"),
                SourceType(name="typing.Any"),
                SourceType(name="builtins.int"),
            ),
        )
        assert returns.resolve(source) == "Int!"

    def test_task_of_list(self, returns: ReturnTypeResolver):
        assert returns.resolve(_task(_list_of(PRODUCT))) == "[Product]"

    def test_unwraps_single_level_only(self, returns: ReturnTypeResolver):
        assert returns.resolve(_task(_task(PRODUCT))) == "Task"

    def test_declared_name_keeps_list_shape(self, returns: ReturnTypeResolver):
        source = _task(_list_of(PRODUCT, non_null=True))
        assert returns.resolve(source, declared_type="CatalogItem") == "[CatalogItem]!"

    def test_declared_name_keeps_nullability(self, returns: ReturnTypeResolver):
        assert returns.resolve(SourceType(name="System.Int32"), declared_type="Count") == "Count!"
        assert returns.resolve(PRODUCT, declared_type="Item") == "Item"

    def test_declared_list_type_is_verbatim(self, returns: ReturnTypeResolver):
        assert returns.resolve(PRODUCT, declared_type="[Item!]!") == "[Item!]!"
        assert returns.resolve(_list_of(PRODUCT), declared_type="[Item]") == "[Item]"

    def test_declared_non_null_keeps_bang(self, returns: ReturnTypeResolver):
        assert returns.resolve(PRODUCT, declared_type="Item!") == "Item!"

    def test_declared_non_null_on_list_keeps_list_shape(self, returns: ReturnTypeResolver):
        source = _list_of(SourceType(name="System.Int64"), non_null=True)
        assert returns.resolve(source, declared_type="AWSTimestamp!") == "[AWSTimestamp]!"
        assert returns.resolve(_list_of(PRODUCT), declared_type="Item!") == "[Item]!"

    def test_declared_non_null_on_optional_list(self, returns: ReturnTypeResolver):
        assert returns.resolve(_nullable(_list_of(PRODUCT)), declared_type="Item!") == "[Item]!"

    def test_declared_type_on_void_is_ignored(self, returns: ReturnTypeResolver):
        assert returns.resolve(_task(), declared_type="Product") == "Boolean!"
