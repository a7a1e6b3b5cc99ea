"""Tests for path expression building."""

from assertify.accessors import AccessorDescriptor, AccessorStyle
from assertify.kinds import ValueKind, classify
from assertify.paths import PathBuilder
from sample_graphs import Address, Status


def accessor(name, style=AccessorStyle.ATTRIBUTE):
    return AccessorDescriptor(name=name, declaring_type=object, style=style, invoke=lambda: None)


def build(path, acc, value):
    return PathBuilder.for_accessor(path, acc, value, classify(value))


def test_root_is_the_given_name():
    assert PathBuilder.root("order") == "order"


def test_without_accessor_path_is_unchanged():
    assert PathBuilder.for_accessor("order", None, 5, ValueKind.INTEGER32) == "order"


def test_composite_results_cast_to_runtime_type():
    address = Address("a", "b", "c")
    assert build("customer", accessor("address"), address) == "cast(Address, customer.address)"


def test_sequence_results_cast():
    assert build("order", accessor("lines"), []) == "cast(list, order.lines)"
    assert build("order", accessor("pair"), (1, 2)) == "cast(tuple, order.pair)"


def test_integer_results_cast():
    assert build("line", accessor("quantity"), 3) == "cast(int, line.quantity)"


def test_scalar_results_unqualified():
    assert build("c", accessor("name"), "Ann") == "c.name"
    assert build("c", accessor("vip"), True) == "c.vip"
    assert build("o", accessor("status"), Status.OPEN) == "o.status"
    assert build("o", accessor("voucher"), None) == "o.voucher"


def test_getter_invocation_syntax():
    assert build("p", accessor("get_name", AccessorStyle.GETTER), "Ann") == "p.get_name()"


def test_item_access_syntax():
    assert build("cfg", accessor("timeout", AccessorStyle.ITEM), 30) == "cast(int, cfg['timeout'])"
    assert build("cfg", accessor(3, AccessorStyle.ITEM), "x") == "cfg[3]"


def test_elements_cast_to_their_own_type():
    assert PathBuilder.for_element("items", 0, Address("a", "b", "c")) == "cast(Address, items[0])"
    assert PathBuilder.for_element("items", 1, "x") == "cast(str, items[1])"


def test_null_elements_unqualified():
    assert PathBuilder.for_element("items", 2, None) == "items[2]"


def test_size():
    assert PathBuilder.for_size("cast(list, o.lines)") == "len(cast(list, o.lines))"


def test_item_keys_spelled_as_literals():
    assert build("cfg", accessor(Status.OPEN, AccessorStyle.ITEM), 1) == "cast(int, cfg[Status.OPEN])"
    assert build("cfg", accessor(True, AccessorStyle.ITEM), "x") == "cfg[True]"
    assert build("cfg", accessor(None, AccessorStyle.ITEM), "x") == "cfg[None]"
