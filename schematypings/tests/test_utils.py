"""Test naming and formatting helpers."""

import pytest

from schematypings.codegen.utils import (
    are_quotes_needed_for_property,
    format_array_depth,
    get_enum_property_name,
    get_interface_name,
    get_method_section,
    get_object_name_by_ref,
    get_section_from_object_name,
    is_method_needed,
    is_pattern_property,
    join_one_of_values,
    prepare_methods_pattern,
    quote_value,
    transform_pattern_property_name,
)


class TestNames:
    """Test declaration and section naming."""

    @pytest.mark.parametrize(
        'name,expected',
        [
            ('users_user_full', 'UsersUserFull'),
            ('messages.send params', 'MessagesSendParams'),
            ('account.getCounters_response', 'AccountGetCountersResponse'),
            ('base_sex enumNames', 'BaseSexEnumNames'),
            ('café_item', 'CafeItem'),
        ],
    )
    def test_get_interface_name(self, name, expected):
        """Test get_interface_name."""
        assert get_interface_name(name) == expected

    def test_get_object_name_by_ref(self):
        """Test get_object_name_by_ref."""
        assert get_object_name_by_ref('objects.json#/definitions/users_user') == 'users_user'
        assert get_object_name_by_ref('users_user') == 'users_user'

    def test_sections(self):
        """Test section names."""
        assert get_section_from_object_name('users_user_full') == 'users'
        assert get_section_from_object_name('base') == 'base'
        assert get_method_section('messages.getHistory') == 'messages'


class TestPatternProperties:
    """Test pattern property naming."""

    def test_numeric_pattern(self):
        """Test the numeric pattern property."""
        assert transform_pattern_property_name('^[0-9]+$') == '[key: number]'

    def test_other_patterns(self):
        """Test other pattern properties."""
        assert transform_pattern_property_name('^[a-z]+$') == '[key: string]'

    def test_is_pattern_property(self):
        """Test is_pattern_property."""
        assert is_pattern_property('[key: string]') is True
        assert is_pattern_property('key') is False


class TestPropertyQuoting:
    """Test detection of property names that need quotes."""

    def test_identifiers_do_not_need_quotes(self):
        """Test that identifiers need no quotes."""
        assert are_quotes_needed_for_property('first_name') is False
        assert are_quotes_needed_for_property('_private') is False

    def test_other_names_need_quotes(self):
        """Test that other names need quotes."""
        assert are_quotes_needed_for_property('2fa') is True
        assert are_quotes_needed_for_property('content-type') is True
        assert are_quotes_needed_for_property('with space') is True

    def test_pattern_properties_are_never_quoted(self):
        """Test that pattern properties are never quoted."""
        assert are_quotes_needed_for_property('[key: number]') is False


class TestValues:
    """Test value quoting and enum member names."""

    def test_quote_value(self):
        """Test quote_value."""
        assert quote_value('male') == "'male'"
        assert quote_value("it's") == "'it\\'s'"
        assert quote_value(3) == '3'
        assert quote_value(True) == 'true'
        assert quote_value(None) == 'null'

    def test_get_enum_property_name(self):
        """Test get_enum_property_name."""
        assert get_enum_property_name('male') == 'MALE'
        assert get_enum_property_name('not specified') == 'NOT_SPECIFIED'
        assert get_enum_property_name('-') == '_'


class TestUnions:
    """Test union and array formatting."""

    def test_join_deduplicates(self):
        """Test that repeated alternatives are dropped."""
        assert join_one_of_values(['number', 'string', 'number']) == 'number | string'

    def test_long_union_is_split(self):
        """Test that a long union is split over lines."""
        values = [f"'value_number_{i}'" for i in range(10)]
        joined = join_one_of_values(values, primitive=True)
        assert joined.startswith("'value_number_0' |\n    'value_number_1'")
        assert joined.count('\n') == 9

    def test_short_union_stays_on_one_line(self):
        """Test that a short union stays on one line."""
        assert join_one_of_values(["'a'", "'b'"], primitive=True) == "'a' | 'b'"

    @pytest.mark.parametrize(
        'value,depth,expected',
        [
            ('string', 1, 'string[]'),
            ('UsersUser', 2, 'UsersUser[][]'),
            ("'a' | 'b'", 1, "Array<'a' | 'b'>"),
            ('number | string', 3, 'Array<number | string>[][]'),
        ],
    )
    def test_format_array_depth(self, value, depth, expected):
        """Test format_array_depth."""
        assert format_array_depth(value, depth) == expected


class TestMethodsPattern:
    """Test methods pattern selection."""

    def test_prepare_methods_pattern(self):
        """Test prepare_methods_pattern."""
        assert prepare_methods_pattern('users.get, messages.*,') == {
            'users.get',
            'messages.*',
        }
        assert prepare_methods_pattern(['users.get', 'a.b,c.d']) == {
            'users.get',
            'a.b',
            'c.d',
        }

    def test_wildcard_selects_everything(self):
        """Test that the wildcard selects every method."""
        assert is_method_needed({'*'}, 'users.get') is True

    def test_section_wildcard(self):
        """Test the section wildcard."""
        patterns = prepare_methods_pattern('messages.*')
        assert is_method_needed(patterns, 'messages.send') is True
        assert is_method_needed(patterns, 'users.get') is False

    def test_exact_name(self):
        """Test exact method names."""
        patterns = prepare_methods_pattern('users.get')
        assert is_method_needed(patterns, 'users.get') is True
        assert is_method_needed(patterns, 'users.search') is False
