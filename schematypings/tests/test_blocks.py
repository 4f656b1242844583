"""Test declaration rendering."""

import pytest

from schematypings.codegen.blocks import (
    CommentCodeBlock,
    DeclarationType,
    Property,
    TypeCodeBlock,
    render_blocks,
)
from schematypings.exceptions import EmptyResultError


class TestInterface:
    """Test interface rendering."""

    def test_required_and_optional(self):
        """Test required and optional members of an interface."""
        block = TypeCodeBlock(
            type=DeclarationType.INTERFACE,
            interface_name='UsersUser',
            ref_name='users_user',
            description='User object',
        )
        block.add_property(
            Property(name='id', value='number', description='User ID', is_required=True)
        )
        block.add_property(Property(name='first_name', value='string'))

        assert block.to_string() == (
            '/**\n'
            ' * User object\n'
            ' */\n'
            '// users_user\n'
            'export interface UsersUser {\n'
            '  /**\n'
            '   * User ID\n'
            '   */\n'
            '  id: number;\n'
            '  first_name?: string;\n'
            '}'
        )

    def test_all_names_quoted_when_one_needs_it(self):
        """Test that every name is quoted when one name needs quotes."""
        block = TypeCodeBlock(
            type=DeclarationType.INTERFACE,
            interface_name='Headers',
            properties=[
                Property(name='content-type', value='string'),
                Property(name='length', value='number'),
                Property(name='[key: string]', value='string', is_required=True),
            ],
        )

        assert block.to_string() == (
            'export interface Headers {\n'
            "  'content-type'?: string;\n"
            "  'length'?: number;\n"
            '  [key: string]: string;\n'
            '}'
        )

    def test_empty_interface(self):
        """Test the placeholder body of an empty interface."""
        block = TypeCodeBlock(type=DeclarationType.INTERFACE, interface_name='BaseEmpty')

        assert block.to_string() == (
            'export interface BaseEmpty {\n'
            '  // empty interface\n'
            '  [key: string]: any;\n'
            '}'
        )

    def test_allowed_empty_interface(self):
        """Test an interface that is allowed to stay empty."""
        block = TypeCodeBlock(
            type=DeclarationType.INTERFACE,
            interface_name='AccountGetCountersParams',
            allow_empty_interface=True,
        )

        assert block.to_string() == 'export interface AccountGetCountersParams {}'


class TestOtherDeclarations:
    """Test type, const and enum rendering."""

    def test_type_alias(self):
        """Test type alias rendering."""
        block = TypeCodeBlock(
            type=DeclarationType.TYPE,
            interface_name='UsersGetResponse',
            ref_name='users.get_response',
            value='UsersUserFull[]',
        )

        assert block.to_string() == (
            '// users.get_response\nexport type UsersGetResponse = UsersUserFull[];'
        )

    def test_const(self):
        """Test constant rendering."""
        block = TypeCodeBlock(
            type=DeclarationType.CONST, interface_name='API_ERROR_UNKNOWN', value='1'
        )
        assert block.to_string() == 'export const API_ERROR_UNKNOWN = 1;'

    def test_not_exported(self):
        """Test a declaration without export."""
        block = TypeCodeBlock(
            type=DeclarationType.TYPE,
            interface_name='Local',
            value='string',
            need_export=False,
        )
        assert block.to_string() == 'type Local = string;'

    @pytest.mark.parametrize(
        'declaration_type',
        [
            DeclarationType.TYPE,
            DeclarationType.CONST,
            DeclarationType.ENUM,
            DeclarationType.CONSTANT_OBJECT,
        ],
    )
    def test_empty_result_raises(self, declaration_type):
        """Test that a declaration without a value raises EmptyResultError."""
        block = TypeCodeBlock(type=declaration_type, interface_name='Empty')

        with pytest.raises(EmptyResultError) as exc_info:
            block.to_string()
        assert exc_info.value.declaration == 'Empty'


class TestComments:
    """Test comment blocks and module rendering."""

    def test_comment_block(self):
        """Test comment block rendering."""
        block = CommentCodeBlock(['users.get'])
        block.append_lines(['', 'Returns detailed information on users.'])

        assert block.to_string() == (
            '/**\n * users.get\n *\n * Returns detailed information on users.\n */'
        )

    def test_render_blocks(self):
        """Test rendering a module from imports and blocks."""
        blocks = [
            CommentCodeBlock(['users.get']),
            TypeCodeBlock(type=DeclarationType.TYPE, interface_name='A', value='1'),
        ]

        assert render_blocks(blocks, "import { B } from './B';") == (
            "import { B } from './B';\n\n/**\n * users.get\n */\n\nexport type A = 1;"
        )
