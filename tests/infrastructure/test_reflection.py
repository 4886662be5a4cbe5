"""Tests for ReflectionAccessor and type-hint classification."""

from __future__ import annotations

import uuid
from collections.abc import MutableSequence, Sequence
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Any, List, Optional

import pytest
from pydantic import AliasPath, BaseModel, ConfigDict, Field

from dtoinit.domain.descriptors import CompositeShape, PrimitiveShape, SequenceShape
from dtoinit.domain.errors import DescriptorError
from dtoinit.domain.types import PrimitiveKind
from dtoinit.infrastructure.reflection import (
    ReflectionAccessor,
    classify,
    describe_class,
    is_composite,
)
from tests import dtos


class TestClassify:
    @pytest.mark.parametrize(
        ("hint", "kind"),
        [
            (str, PrimitiveKind.TEXT),
            (int, PrimitiveKind.INTEGER),
            (float, PrimitiveKind.FLOAT),
            (bool, PrimitiveKind.BOOLEAN),
        ],
    )
    def test_primitives(self, hint: type, kind: PrimitiveKind) -> None:
        assert classify(hint) == PrimitiveShape(kind)

    def test_bool_is_not_integer(self) -> None:
        assert classify(bool) == PrimitiveShape(PrimitiveKind.BOOLEAN)

    @pytest.mark.parametrize("hint", [list[str], List[str], Sequence[str], MutableSequence[str]])  # noqa: UP006
    def test_sequences(self, hint: Any) -> None:
        assert classify(hint) == SequenceShape(PrimitiveShape(PrimitiveKind.TEXT))

    def test_bare_list_has_no_element(self) -> None:
        assert classify(list) == SequenceShape()

    def test_list_of_any_has_no_element(self) -> None:
        assert classify(list[Any]) == SequenceShape()

    def test_optional_is_unwrapped(self) -> None:
        assert classify(Optional[int]) == PrimitiveShape(PrimitiveKind.INTEGER)  # noqa: UP045
        assert classify(dtos.UserDto | None) == CompositeShape(dtos.UserDto)

    def test_annotated_is_unwrapped(self) -> None:
        assert classify(Annotated[str, "meta"]) == PrimitiveShape(PrimitiveKind.TEXT)

    @pytest.mark.parametrize(
        "hint",
        [dict[str, int], int | str, tuple[int, ...], set[str], bytes, Any, dtos.Color, None],
    )
    def test_unsupported(self, hint: Any) -> None:
        assert classify(hint) is None

    def test_composites(self) -> None:
        assert classify(dtos.User) == CompositeShape(dtos.User)
        assert classify(dtos.Account) == CompositeShape(dtos.Account)


class TestIsComposite:
    def test_kinds(self) -> None:
        assert is_composite(dtos.UserDto)
        assert is_composite(dtos.User)
        assert is_composite(dtos.PlainSettings)
        assert is_composite(dtos.Account)

    def test_non_dtos(self) -> None:
        assert not is_composite(str)
        assert not is_composite(dict)
        assert not is_composite(dtos.Color)
        assert not is_composite(object)

    @pytest.mark.parametrize("cls", [uuid.UUID, Path, datetime, Decimal])
    def test_stdlib_value_types(self, cls: type) -> None:
        assert not is_composite(cls)
        assert classify(cls) is None

    def test_unannotated_properties_do_not_count(self) -> None:
        class Wrapped:
            def __init__(self) -> None:
                self._raw = b""

            @property
            def size(self):  # noqa: ANN201
                return len(self._raw)

        assert not is_composite(Wrapped)
        assert describe_class(Wrapped).fields == ()

    def test_annotated_property_counts(self) -> None:
        assert is_composite(dtos.Account)


class TestDescribeDataclass:
    def test_fields_in_declaration_order(self) -> None:
        td = describe_class(dtos.OrderDto)
        assert td.identity is dtos.OrderDto
        assert td.name == "OrderDto"
        assert [f.name for f in td.fields] == ["order_id", "product", "reviews"]
        assert td.get_field("product").shape == CompositeShape(dtos.ProductDto)
        assert td.get_field("reviews").shape == SequenceShape(CompositeShape(dtos.ReviewDto))

    def test_frozen_fields_are_read_only(self) -> None:
        td = describe_class(dtos.FrozenPoint)
        assert all(not f.writable for f in td.fields)

    def test_unresolved_annotation_leaves_field_unshaped(self) -> None:
        td = describe_class(dtos.Broken)
        assert [f.name for f in td.fields] == ["missing"]
        assert td.get_field("missing").shape is None

    def test_type_checking_import_skips_only_that_field(self) -> None:
        td = describe_class(dtos.Invoice)
        assert td.get_field("number").shape == PrimitiveShape(PrimitiveKind.TEXT)
        assert td.get_field("lines").shape == SequenceShape(PrimitiveShape(PrimitiveKind.TEXT))
        assert td.get_field("total").shape is None

    def test_value_types_are_not_expanded(self) -> None:
        td = describe_class(dtos.WithValueTypes)
        assert td.get_field("ident").shape is None
        assert td.get_field("location").shape is None
        assert td.get_field("label").shape == PrimitiveShape(PrimitiveKind.TEXT)

    def test_loose_shapes(self) -> None:
        td = describe_class(dtos.Loose)
        assert td.get_field("anything").shape == SequenceShape()
        assert td.get_field("mapping").shape is None
        assert td.get_field("choice").shape is None
        assert td.get_field("color").shape is None
        assert td.get_field("matrix").shape == SequenceShape(
            SequenceShape(PrimitiveShape(PrimitiveKind.INTEGER))
        )


class TestDescribePydantic:
    def test_alias_becomes_key(self) -> None:
        fd = describe_class(dtos.Order).get_field("order_id")
        assert fd.key == "orderId"
        assert fd.shape == PrimitiveShape(PrimitiveKind.TEXT)

    def test_forward_references_resolved(self) -> None:
        td = describe_class(dtos.User)
        assert td.get_field("orders").shape == SequenceShape(CompositeShape(dtos.Order))

    def test_frozen_model_is_read_only(self) -> None:
        td = describe_class(dtos.FrozenModel)
        assert [f.writable for f in td.fields] == [False, False]

    def test_alias_choices_use_first_choice(self) -> None:
        fd = describe_class(dtos.Aliased).get_field("code")
        assert fd.key == "productCode"
        assert fd.shape == PrimitiveShape(PrimitiveKind.TEXT)

    def test_nested_alias_path_is_skipped(self) -> None:
        fd = describe_class(dtos.Aliased).get_field("sku")
        assert fd.key == "sku"
        assert fd.shape is None

    def test_nested_alias_path_kept_when_populated_by_name(self) -> None:
        class ByName(BaseModel):
            model_config = ConfigDict(populate_by_name=True)

            sku: str = Field(default="none", validation_alias=AliasPath("meta", "sku"))

        fd = describe_class(ByName).get_field("sku")
        assert fd.key == "sku"
        assert fd.shape == PrimitiveShape(PrimitiveKind.TEXT)

    def test_undefined_forward_reference_raises(self) -> None:
        with pytest.raises(DescriptorError, match="BrokenModel"):
            describe_class(dtos.BrokenModel)


class TestDescribePlainClass:
    def test_annotated_attributes(self) -> None:
        td = describe_class(dtos.PlainSettings)
        assert [f.name for f in td.fields] == ["title", "retries", "ratio", "enabled", "tags"]
        assert all(f.writable for f in td.fields)

    def test_properties(self) -> None:
        td = describe_class(dtos.Account)
        assert [f.name for f in td.fields] == ["owner", "balance", "account_id"]
        assert td.get_field("owner").writable is True
        assert td.get_field("account_id").writable is False
        assert td.get_field("balance").shape == PrimitiveShape(PrimitiveKind.FLOAT)

    def test_not_a_class(self) -> None:
        with pytest.raises(DescriptorError, match="not a class"):
            describe_class("UserDto")


class TestReflectionAccessor:
    def test_caches_descriptors(self) -> None:
        accessor = ReflectionAccessor()
        assert accessor.describe(dtos.UserDto) is accessor.describe(dtos.UserDto)
