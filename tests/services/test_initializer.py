"""Tests for the library entry points on real DTO classes."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from dtoinit import (
    ConstructionError,
    ConversionError,
    DescriptorError,
    DtoInitializer,
    default_tree,
    describe,
    init,
    init_direct,
    init_structural,
)
from dtoinit.domain.types import Mode
from tests import dtos

SHOP_TREE = {
    "name": "",
    "age": 0,
    "orders": [
        {
            "order_id": "",
            "product": {"name": "", "price": 0.0, "category": ""},
            "reviews": [{"reviewer": "", "comment": "", "rating": 0}],
        }
    ],
}


class TestDirectMode:
    def test_shop_scenario(self) -> None:
        user = init_direct(dtos.UserDto)
        assert user.name == ""
        assert user.age == 0
        (order,) = user.orders
        assert order.order_id == ""
        assert order.product == dtos.ProductDto(name="", price=0.0, category="")
        (review,) = order.reviews
        assert (review.reviewer, review.comment, review.rating) == ("", "", 0)
        assert review.user is None

    def test_init_is_direct(self) -> None:
        assert init is init_direct

    def test_self_reference(self) -> None:
        node = init(dtos.TreeNode)
        assert node == dtos.TreeNode(label="", parent=None, children=[])

    def test_mutual_reference(self) -> None:
        author = init(dtos.Author)
        assert author.book == dtos.Book(title="", author=None)

    def test_siblings_of_same_type_both_expanded(self) -> None:
        library = init(dtos.Library)
        expected = dtos.Author(name="", book=dtos.Book(title="", author=None))
        assert library.primary == expected
        assert library.secondary == expected

    def test_read_only_fields_keep_construction_value(self) -> None:
        account = init(dtos.Account)
        assert account.owner == ""
        assert account.balance == 0.0
        assert account.account_id == "acc-0"

    def test_frozen_nested_instance_left_as_constructed(self) -> None:
        placement = init(dtos.Placement)
        assert placement.origin == dtos.FrozenPoint(x=7, y=9)

    def test_plain_annotated_class(self) -> None:
        settings = init(dtos.PlainSettings)
        assert settings.title == ""
        assert settings.retries == 0
        assert settings.ratio == 0.0
        assert settings.enabled is False
        assert settings.tags == [""]

    def test_unsupported_fields_untouched(self) -> None:
        loose = init(dtos.Loose)
        assert loose.anything == []
        assert loose.loose_items == []
        assert loose.mapping == {}
        assert loose.choice == 5
        assert loose.color is dtos.Color.RED
        assert loose.matrix == [[0]]
        assert loose.tags == [""]
        assert loose.flag is False

    def test_pydantic_model_with_defaults(self) -> None:
        flags = init(dtos.Flags)
        assert flags.active is False
        assert flags.label == ""
        assert flags.scores == [0.0]

    def test_frozen_model(self) -> None:
        assert init(dtos.FrozenModel) == dtos.FrozenModel(code="X", level=3)

    def test_missing_no_arg_constructor_aborts(self) -> None:
        with pytest.raises(ConstructionError, match="NeedsArgs"):
            init(dtos.Wrapper)

    def test_required_pydantic_fields_abort(self) -> None:
        with pytest.raises(ConstructionError, match="User"):
            init(dtos.User)

    def test_throwing_setter_aborts(self) -> None:
        with pytest.raises(ConstructionError, match="Exploding"):
            init(dtos.Exploding)

    def test_unresolvable_annotation_field_omitted(self) -> None:
        assert init(dtos.Broken) == dtos.Broken(missing=None)

    def test_type_checking_only_import_omitted(self) -> None:
        assert init_direct(dtos.Invoice) == dtos.Invoice(number="", lines=[""], total=None)

    def test_plain_class_with_unresolvable_annotation(self) -> None:
        ledger = init_direct(dtos.Ledger)
        assert ledger.owner == ""
        assert ledger.invoices == [dtos.Invoice(number="", lines=[""])]
        assert ledger.total is None

    def test_value_types_left_unset(self) -> None:
        assert init_direct(dtos.WithValueTypes) == dtos.WithValueTypes(label="")

    def test_incomplete_pydantic_model_aborts(self) -> None:
        with pytest.raises(DescriptorError, match="BrokenModel"):
            init(dtos.BrokenModel)


class TestStructuralMode:
    def test_tree_shop_scenario(self) -> None:
        assert default_tree(dtos.UserDto) == SHOP_TREE

    def test_converted_shop_scenario(self) -> None:
        user = init_structural(dtos.UserDto)
        assert isinstance(user, dtos.UserDto)
        assert user.orders[0].reviews[0].user is None

    def test_pydantic_required_fields(self) -> None:
        user = init_structural(dtos.User)
        assert isinstance(user, dtos.User)
        assert user.orders[0].order_id == ""
        assert user.orders[0].product.price == 0.0
        assert user.orders[0].reviews[0].user is None

    def test_tree_uses_aliases(self) -> None:
        tree = default_tree(dtos.User)
        assert "orderId" in tree["orders"][0]

    def test_tree_includes_read_only_fields(self) -> None:
        assert default_tree(dtos.Account) == {"owner": "", "balance": 0.0, "account_id": ""}
        assert default_tree(dtos.FrozenPoint) == {"x": 0, "y": 0}

    def test_frozen_dataclass_converted_from_tree(self) -> None:
        assert init_structural(dtos.Placement).origin == dtos.FrozenPoint(x=0, y=0)

    def test_no_arg_constructor_not_required(self) -> None:
        assert init_structural(dtos.NeedsArgs) == dtos.NeedsArgs(value="")

    def test_plain_class_cannot_be_converted(self) -> None:
        with pytest.raises(ConversionError, match="Account"):
            init_structural(dtos.Account)

    def test_value_types_left_unset(self) -> None:
        assert default_tree(dtos.WithValueTypes) == {"label": ""}
        assert init_structural(dtos.WithValueTypes) == dtos.WithValueTypes(label="")

    def test_unresolvable_field_absent_from_tree(self) -> None:
        assert default_tree(dtos.Invoice) == {"number": "", "lines": [""]}
        assert default_tree(dtos.Broken) == {}

    def test_alias_choices(self) -> None:
        assert default_tree(dtos.Aliased) == {"productCode": ""}
        assert init_structural(dtos.Aliased) == dtos.Aliased(productCode="")


class TestModeEquivalence:
    @pytest.mark.parametrize(
        "cls", [dtos.UserDto, dtos.TreeNode, dtos.Author, dtos.Library, dtos.Loose]
    )
    def test_same_value(self, cls: type) -> None:
        assert init_direct(cls) == init_structural(cls)

    def test_pydantic_same_dump(self) -> None:
        assert init_direct(dtos.Flags).model_dump() == init_structural(dtos.Flags).model_dump()


class TestIndependence:
    def test_back_to_back(self) -> None:
        assert default_tree(dtos.UserDto) == default_tree(dtos.UserDto)
        assert init(dtos.UserDto) == init(dtos.UserDto)

    def test_concurrent_calls(self) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            trees = list(pool.map(lambda _: default_tree(dtos.UserDto), range(32)))
            users = list(pool.map(lambda _: init(dtos.UserDto), range(32)))
        assert all(tree == SHOP_TREE for tree in trees)
        assert all(user == users[0] for user in users)


class TestDtoInitializer:
    def test_truncations_reported(self) -> None:
        outcome = DtoInitializer().direct(dtos.UserDto)
        assert [t.type_name for t in outcome.truncations] == ["UserDto"]

    def test_library_truncations(self) -> None:
        outcome = DtoInitializer().tree(dtos.Library)
        assert [str(t) for t in outcome.truncations] == [
            "Cycle truncated at Author (Library -> Author -> Book -> Author)",
            "Cycle truncated at Author (Library -> Author -> Book -> Author)",
        ]

    def test_run_dispatches_mode(self) -> None:
        initializer = DtoInitializer()
        assert initializer.run(dtos.NeedsArgs, Mode.STRUCTURAL).value == dtos.NeedsArgs("")
        with pytest.raises(ConstructionError):
            initializer.run(dtos.NeedsArgs, Mode.DIRECT)

    def test_describe(self) -> None:
        assert [f.name for f in describe(dtos.ProductDto).fields] == ["name", "price", "category"]
