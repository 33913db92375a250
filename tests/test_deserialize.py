"""End-to-end deserialization tests."""

import datetime
import decimal
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

import pytest

from pyjson2obj import JsonDeserializer, deserialize
from pyjson2obj._errors import MissingRootError, ParseError, TypeCoercionError


@dataclass
class Named:
    Foo: str = ""


@dataclass
class Pascal:
    FooBar: str = ""


@dataclass
class Counter:
    Count: int = 0


@dataclass
class Element:
    X: int = 0


@dataclass
class Container:
    Items: list[Element] = field(default_factory=list)


@dataclass
class Tagged:
    Tags: dict[str, str] = field(default_factory=dict)


@dataclass
class Scalars:
    Flag: bool = False
    Ratio: float = 0.0
    Price: decimal.Decimal = decimal.Decimal("0")
    Created: datetime.datetime = datetime.datetime(2000, 1, 1)
    Day: datetime.date = datetime.date(2000, 1, 1)


@dataclass
class Address:
    street: str = ""
    zip_code: str = ""


@dataclass
class Person:
    name: str = ""
    age: int = 0
    address: Address = field(default_factory=Address)
    nicknames: list[str] = field(default_factory=list)
    scores: dict[str, int] = field(default_factory=dict)
    manager: Optional[Address] = None


@dataclass
class Matrix:
    Rows: list[list[int]] = field(default_factory=list)
    Groups: dict[str, list[Element]] = field(default_factory=dict)


@dataclass
class Ordered:
    Values: OrderedDict[str, int] = field(default_factory=OrderedDict)


class TestExactName:
    def test_string_member(self):
        result = deserialize('{"Foo":"bar"}', Named)
        assert result.Foo == "bar"

    def test_returns_instance_of_target(self):
        assert isinstance(deserialize('{"Foo":"bar"}', Named), Named)

    def test_bytes_input(self):
        assert deserialize(b'{"Foo":"bar"}', Named).Foo == "bar"


class TestNameResolution:
    @pytest.mark.parametrize("key", ["FooBar", "fooBar", "foobar", "Foo_Bar", "foo_bar"])
    def test_each_convention_matches(self, key):
        result = deserialize(f'{{"{key}":"v"}}', Pascal)
        assert result.FooBar == "v"

    def test_exact_name_wins_over_camel(self):
        result = deserialize('{"fooBar":"camel","FooBar":"exact"}', Pascal)
        assert result.FooBar == "exact"

    def test_camel_wins_over_lower(self):
        result = deserialize('{"foobar":"lower","fooBar":"camel"}', Pascal)
        assert result.FooBar == "camel"

    def test_lower_wins_over_underscored(self):
        result = deserialize('{"Foo_Bar":"underscored","foobar":"lower"}', Pascal)
        assert result.FooBar == "lower"

    def test_underscored_wins_over_underscored_lower(self):
        result = deserialize('{"foo_bar":"snake","Foo_Bar":"underscored"}', Pascal)
        assert result.FooBar == "underscored"

    def test_snake_member_matches_camel_key(self):
        result = deserialize('{"zipCode":"12345"}', Address)
        assert result.zip_code == "12345"

    def test_snake_member_matches_pascal_key(self):
        result = deserialize('{"ZipCode":"12345","Street":"Main"}', Address)
        assert result.zip_code == "12345"
        assert result.street == "Main"


class TestPrimitiveCoercion:
    def test_quoted_integer(self):
        assert deserialize('{"Count":"42"}', Counter).Count == 42

    def test_numeric_integer(self):
        assert deserialize('{"Count":42}', Counter).Count == 42

    def test_malformed_integer(self):
        with pytest.raises(TypeCoercionError):
            deserialize('{"Count":"abc"}', Counter)

    def test_fractional_integer(self):
        with pytest.raises(TypeCoercionError):
            deserialize('{"Count":4.5}', Counter)

    def test_coercion_error_names_member(self):
        with pytest.raises(TypeCoercionError) as exc_info:
            deserialize('{"Count":"abc"}', Counter)
        assert "Count" in exc_info.value.internal()
        assert "abc" not in str(exc_info.value)

    def test_bool_float_decimal(self):
        result = deserialize(
            '{"Flag":true,"Ratio":"0.25","Price":19.990}', Scalars
        )
        assert result.Flag is True
        assert result.Ratio == 0.25
        assert result.Price == decimal.Decimal("19.990")
        assert str(result.Price) == "19.990"

    def test_malformed_decimal(self):
        with pytest.raises(TypeCoercionError):
            deserialize('{"Price":"1.2.3"}', Scalars)

    def test_datetime(self):
        result = deserialize('{"Created":"2021-09-01T18:00:00+00:00"}', Scalars)
        assert result.Created == datetime.datetime(
            2021, 9, 1, 18, tzinfo=datetime.timezone.utc
        )

    def test_date(self):
        result = deserialize('{"Day":"2024-02-29"}', Scalars)
        assert result.Day == datetime.date(2024, 2, 29)

    def test_null_datetime_is_zero_value(self):
        result = deserialize('{"Created":null,"Day":null}', Scalars)
        assert result.Created == datetime.datetime.min
        assert result.Day == datetime.date.min

    def test_date_format_hint(self):
        result = deserialize(
            '{"Created":"01/09/2021"}', Scalars, date_format="%d/%m/%Y"
        )
        assert result.Created == datetime.datetime(2021, 9, 1)


class TestStrings:
    def test_escaped_quotes_are_decoded(self):
        result = deserialize(r'{"Foo":"say \"hi\""}', Named)
        assert result.Foo == 'say "hi"'

    def test_unicode_escape(self):
        result = deserialize(r'{"Foo":"caf\u00e9 \ud83d\ude00"}', Named)
        assert result.Foo == "café 😀"

    def test_number_onto_string(self):
        assert deserialize('{"Foo":12.50}', Named).Foo == "12.50"

    def test_empty_string(self):
        assert deserialize('{"Foo":""}', Named).Foo == ""


class TestLists:
    def test_list_of_objects_in_order(self):
        result = deserialize('{"Items":[{"X":"1"},{"X":"2"}]}', Container)
        assert len(result.Items) == 2
        assert [item.X for item in result.Items] == [1, 2]
        assert all(isinstance(item, Element) for item in result.Items)

    def test_empty_array_yields_empty_list(self):
        result = deserialize('{"Items":[]}', Container)
        assert result.Items == []

    def test_list_of_scalars(self):
        result = deserialize('{"nicknames":["a","b","c"]}', Person)
        assert result.nicknames == ["a", "b", "c"]

    def test_nested_lists(self):
        result = deserialize('{"Rows":[[1,2],[3]]}', Matrix)
        assert result.Rows == [[1, 2], [3]]

    def test_malformed_element_aborts(self):
        with pytest.raises(TypeCoercionError) as exc_info:
            deserialize('{"Items":[{"X":"1"},{"X":"two"}]}', Container)
        assert "Items[1].X" in exc_info.value.internal()


class TestMappings:
    def test_string_keyed_map(self):
        result = deserialize('{"Tags":{"a":"1","b":"2"}}', Tagged)
        assert result.Tags == {"a": "1", "b": "2"}

    def test_insertion_order_preserved(self):
        result = deserialize('{"Tags":{"z":"1","a":"2","m":"3"}}', Tagged)
        assert list(result.Tags) == ["z", "a", "m"]

    def test_duplicate_keys_overwrite(self):
        result = deserialize('{"Tags":{"a":"1","a":"2"}}', Tagged)
        assert result.Tags == {"a": "2"}

    def test_map_of_lists_of_objects(self):
        result = deserialize('{"Groups":{"g":[{"X":3}]}}', Matrix)
        assert result.Groups["g"][0].X == 3

    def test_ordered_dict_container(self):
        result = deserialize('{"Values":{"b":2,"a":1}}', Ordered)
        assert isinstance(result.Values, OrderedDict)
        assert list(result.Values.items()) == [("b", 2), ("a", 1)]


class TestNestedObjects:
    def test_nested_object(self):
        doc = '{"name":"Ann","age":"30","address":{"street":"Main","zip_code":"1"}}'
        result = deserialize(doc, Person)
        assert result.name == "Ann"
        assert result.age == 30
        assert result.address == Address(street="Main", zip_code="1")

    def test_optional_member_null(self):
        result = deserialize('{"manager":null}', Person)
        assert result.manager is None

    def test_optional_member_present(self):
        result = deserialize('{"manager":{"street":"Side"}}', Person)
        assert result.manager == Address(street="Side")


class TestDefaults:
    def test_extra_keys_ignored(self):
        result = deserialize('{"Foo":"bar","Unused":1,"other":[1,2]}', Named)
        assert result.Foo == "bar"

    def test_missing_member_keeps_default(self):
        result = deserialize("{}", Person)
        assert result == Person()

    def test_idempotent(self):
        doc = '{"name":"Ann","address":{"street":"Main"},"scores":{"x":1}}'
        assert deserialize(doc, Person) == deserialize(doc, Person)

    def test_array_root_onto_object_keeps_defaults(self):
        assert deserialize("[1,2]", Named) == Named()


class TestRootElement:
    def test_root_element_selects_subtree(self):
        result = deserialize('{"data":{"Foo":"bar"}}', Named, root_element="data")
        assert result.Foo == "bar"

    def test_missing_root_element(self):
        with pytest.raises(MissingRootError):
            deserialize('{"Foo":"bar"}', Named, root_element="data")

    def test_root_element_on_array_document(self):
        with pytest.raises(MissingRootError):
            deserialize("[]", Named, root_element="data")

    def test_no_root_element_uses_document(self):
        assert deserialize('{"data":{},"Foo":"bar"}', Named).Foo == "bar"

    def test_namespace_is_ignored(self):
        result = deserialize('{"Foo":"bar"}', Named, namespace="urn:example")
        assert result.Foo == "bar"


class TestGenericTargets:
    def test_top_level_list(self):
        result = deserialize('[{"X":1},{"X":2}]', list[Element])
        assert result == [Element(X=1), Element(X=2)]

    def test_top_level_dict(self):
        assert deserialize('{"a":1}', dict[str, int]) == {"a": 1}

    def test_top_level_list_from_object_is_empty(self):
        assert deserialize('{"a":1}', list[int]) == []


class TestParseErrors:
    def test_malformed_document(self):
        with pytest.raises(ParseError):
            deserialize('{"Foo":', Named)

    def test_parse_error_precedes_root_check(self):
        with pytest.raises(ParseError):
            deserialize("{nope}", Named, root_element="data")


class TestJsonDeserializer:
    def test_reusable_configuration(self):
        deserializer = JsonDeserializer(root_element="payload")
        first = deserializer.deserialize('{"payload":{"Foo":"a"}}', Named)
        second = deserializer.deserialize('{"payload":{"Foo":"b"}}', Named)
        assert (first.Foo, second.Foo) == ("a", "b")

    def test_namespace_attribute_kept(self):
        deserializer = JsonDeserializer(namespace="urn:example")
        assert deserializer.namespace == "urn:example"


class TestLogging:
    def test_package_logger_has_single_null_handler(self):
        handlers = logging.getLogger("pyjson2obj").handlers
        assert [type(h) for h in handlers] == [logging.NullHandler]
