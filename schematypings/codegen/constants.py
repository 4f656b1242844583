"""Well-known names and type mappings shared by the generators."""

DEFAULT_API_VERSION = '5.131'

NEW_LINE = '\n'
TAB = '  '

# Unions longer than this are rendered one alternative per line
MAX_INLINE_UNION_LENGTH = 120

SCALAR_TYPES = {
    'integer': 'number',
    'boolean': 'boolean',
    'number': 'number',
    'string': 'string',
}

PRIMITIVE_TYPES = {
    **SCALAR_TYPES,
    'array': 'any[]',
    'object': '{ [key: string]: unknown }',
    'mixed': 'any /* mixed primitive */',
}

# Sentinel references whose meaning is hard-coded instead of looked up
BASE_BOOL_INT_REF = 'base_bool_int'
BASE_OK_RESPONSE_REF = 'base_ok_response'
BASE_PROPERTY_EXISTS_REF = 'base_property_exists'

SENTINEL_EXPRESSIONS = {
    BASE_BOOL_INT_REF: '0 | 1',
    BASE_OK_RESPONSE_REF: '1',
    BASE_PROPERTY_EXISTS_REF: '1',
}

BASE_API_PARAMS_INTERFACE_NAME = 'BaseAPIParams'

DEFAULT_IGNORED_RESPONSES = {
    'storage.get': ['keysResponse'],
}
