"""Tests for accessor discovery and the inclusion policy."""

import pytest
from pydantic import BaseModel, computed_field

from assertify.accessors import AccessorStyle, discover_accessors
from assertify.config import SnapshotConfig
from assertify.exceptions import IntrospectionError
from sample_graphs import Address, Badge, Customer, Person, Point, Status


class Item(BaseModel):
    name: str
    qty: int

    @computed_field
    @property
    def label(self) -> str:
        return f"{self.name} x{self.qty}"


def names(accessors):
    return [accessor.name for accessor in accessors]


class TestObjectProvider:
    """Tests for plain object accessor discovery."""

    def test_dataclass_fields_sorted_by_name(self):
        address = Address("Main St 1", "Springfield", "12345")
        assert names(discover_accessors(address, SnapshotConfig())) == ["city", "street", "zip_code"]

    def test_zero_argument_getters_only(self):
        accessors = discover_accessors(Person("Ann", 3, []), SnapshotConfig())

        assert names(accessors) == ["get_age", "get_name", "get_tags"]
        assert all(accessor.style is AccessorStyle.GETTER for accessor in accessors)

    def test_getter_with_defaults_counts_as_zero_argument(self):
        assert "get_initial" in names(discover_accessors(Badge("vip"), SnapshotConfig()))

    def test_private_attributes_excluded(self):
        person = Person("Ann", 3, [])
        assert not any(name.startswith("_") for name in names(discover_accessors(person, SnapshotConfig())))

    def test_class_identity_never_included(self):
        config = SnapshotConfig(include_ids=True)
        assert "get_class" not in names(discover_accessors(Badge("vip"), config))

    def test_denylisted_accessors_excluded(self):
        assert "metadata" not in names(discover_accessors(Badge("vip"), SnapshotConfig()))

    def test_identifiers_excluded_by_default(self):
        customer = Customer(id=1, name="Ann")
        assert "id" not in names(discover_accessors(customer, SnapshotConfig()))

    def test_identifiers_included_on_request(self):
        customer = Customer(id=1, name="Ann")
        assert "id" in names(discover_accessors(customer, SnapshotConfig(include_ids=True)))

    def test_slots_discovered(self):
        assert names(discover_accessors(Point(1, 2), SnapshotConfig())) == ["x", "y"]

    def test_accessors_invoke_live_values(self):
        address = Address("Main St 1", "Springfield", "12345")
        accessors = {a.name: a for a in discover_accessors(address, SnapshotConfig())}
        address.city = "Shelbyville"

        assert accessors["city"].invoke() == "Shelbyville"


class TestMappingProvider:
    def test_keys_in_insertion_order(self):
        accessors = discover_accessors({"b": 1, "a": 2}, SnapshotConfig())

        assert names(accessors) == ["b", "a"]
        assert accessors[0].style is AccessorStyle.ITEM
        assert accessors[0].invoke() == 1

    def test_underscore_keys_are_data(self):
        assert names(discover_accessors({"_meta": 1}, SnapshotConfig())) == ["_meta"]

    def test_id_key_filtered(self):
        assert names(discover_accessors({"id": 1, "name": "x"}, SnapshotConfig())) == ["name"]

    def test_enum_and_int_keys_kept(self):
        assert names(discover_accessors({Status.OPEN: 1, 7: 2}, SnapshotConfig())) == [Status.OPEN, 7]

    def test_keys_without_literal_form_skipped(self):
        mapping = {(1, 2): "tuple", 1.5: "float", object(): "object", "kept": 1}
        assert names(discover_accessors(mapping, SnapshotConfig())) == ["kept"]


class TestPydanticProvider:
    def test_declared_and_computed_fields(self):
        accessors = discover_accessors(Item(name="bolt", qty=3), SnapshotConfig())
        assert names(accessors) == ["label", "name", "qty"]

    def test_model_plumbing_not_listed(self):
        found = names(discover_accessors(Item(name="bolt", qty=3), SnapshotConfig()))
        assert not any(name.startswith("model_") for name in found)


class TestRegistration:
    def test_type_table_overrides_discovery(self):
        config = SnapshotConfig(type_accessors=((Address, ("zip_code", "street")),))
        address = Address("Main St 1", "Springfield", "12345")

        assert names(discover_accessors(address, config)) == ["zip_code", "street"]

    def test_type_table_is_exact(self):
        class SpecialAddress(Address):
            pass

        config = SnapshotConfig(type_accessors=((Address, ("city",)),))
        special = SpecialAddress("Main St 1", "Springfield", "12345")

        assert names(discover_accessors(special, config)) == ["city", "street", "zip_code"]

    def test_custom_provider_takes_precedence(self):
        class Broken:
            def claims(self, value):
                return isinstance(value, Address)

            def accessors(self, value):
                raise RuntimeError("metadata unavailable")

        config = SnapshotConfig(accessor_providers=(Broken(),))
        with pytest.raises(IntrospectionError, match="metadata unavailable"):
            discover_accessors(Address("a", "b", "c"), config)
