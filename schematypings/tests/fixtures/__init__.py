"""Test fixtures for schematypings tests.

This module provides a small API schema in the shape of the real documents
(``objects.json``, ``responses.json``, ``methods.json`` and ``errors.json``).
"""

import copy


def _ref(name: str, document: str = 'objects') -> dict:
    return {'$ref': f'{document}.json#/definitions/{name}'}


OBJECTS = {
    'base_bool_int': {'type': 'integer', 'enum': [0, 1]},
    'base_ok_response': {'type': 'integer', 'enum': [1]},
    'base_sex': {
        'type': 'integer',
        'description': 'Sex',
        'enum': [0, 1, 2],
        'enumNames': ['unknown', 'female', 'male'],
    },
    'users_fields': {'type': 'string', 'enum': ['photo_id', 'verified', 'sex']},
    'users_user_min': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer', 'description': 'User ID'},
            'first_name': {'type': 'string'},
            'deactivated': {'type': 'string', 'enum': ['deleted', 'banned']},
        },
        'required': ['id'],
    },
    'users_user': {
        'type': 'object',
        'allOf': [
            _ref('users_user_min'),
            {
                'type': 'object',
                'properties': {
                    'sex': _ref('base_sex'),
                    'online': _ref('base_bool_int'),
                },
            },
        ],
    },
    'users_user_full': {
        'type': 'object',
        'allOf': [
            _ref('users_user'),
            {
                'type': 'object',
                'properties': {
                    'status': {'type': 'string'},
                    'photo': _ref('photos_photo'),
                },
            },
        ],
    },
    'photos_photo': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer'},
            'owner_id': {'type': 'integer'},
            'sizes': {'type': 'array', 'items': _ref('photos_photo_sizes')},
        },
        'required': ['id', 'owner_id'],
    },
    'photos_photo_sizes': {
        'type': 'object',
        'properties': {
            'type': _ref('photos_photo_sizes_type'),
            'url': {'type': 'string'},
            'width': {'type': 'integer'},
        },
        'required': ['url'],
    },
    'photos_photo_sizes_type': {'type': 'string', 'enum': ['s', 'm', 'x']},
}

RESPONSES = {
    'base_ok_response': {
        'type': 'object',
        'properties': {'response': _ref('base_ok_response')},
    },
    'users_get_response': {
        'type': 'object',
        'properties': {
            'response': {'type': 'array', 'items': _ref('users_user_full')},
        },
    },
    'account_get_counters_response': {
        'type': 'object',
        'properties': {
            'response': {
                'type': 'object',
                'properties': {
                    'friends': {'type': 'integer'},
                    'messages': {'type': 'integer'},
                },
            },
        },
    },
    'storage_get_response': {
        'type': 'object',
        'properties': {
            'response': {
                'type': 'array',
                'items': {
                    'type': 'object',
                    'properties': {'key': {'type': 'string'}},
                },
            },
        },
    },
    'storage_get_keys_response': {
        'type': 'object',
        'properties': {
            'response': {'type': 'array', 'items': {'type': 'string'}},
        },
    },
}

METHODS = {
    'version': '5.131',
    'methods': [
        {
            'name': 'users.get',
            'description': 'Returns detailed information on users.',
            'parameters': [
                {
                    'name': 'user_ids',
                    'type': 'array',
                    'items': {'type': 'string'},
                    'description': 'User IDs or screen names.',
                },
                {
                    'name': 'fields',
                    'type': 'array',
                    'items': _ref('users_fields'),
                },
                {
                    'name': 'name_case',
                    'type': 'string',
                    'enum': ['nom', 'gen'],
                },
            ],
            'responses': {
                'response': _ref('users_get_response', 'responses'),
            },
        },
        {
            'name': 'account.setOnline',
            'parameters': [
                {'name': 'voip', 'type': 'boolean', 'description': 'Voice calls'},
            ],
            'responses': {
                'response': _ref('base_ok_response', 'responses'),
            },
        },
        {
            'name': 'account.getCounters',
            'responses': {
                'response': _ref('account_get_counters_response', 'responses'),
            },
        },
        {
            'name': 'storage.get',
            'parameters': [
                {'name': 'key', 'type': 'string', 'required': True},
            ],
            'responses': {
                'response': _ref('storage_get_response', 'responses'),
                'keysResponse': _ref('storage_get_keys_response', 'responses'),
            },
        },
    ],
}

ERRORS = {
    'api_error_auth': {
        'code': 5,
        'description': 'User authorization failed',
    },
    'api_error_unknown': {
        'code': 1,
        'description': 'Unknown error occurred',
    },
    'api_error_disabled': {
        'code': 2,
        'description': 'Application is disabled',
        '$comment': 'Enable your application or use test mode',
    },
}


def sample_schema() -> dict:
    """Fresh copies of every document, keyed like the generator arguments."""
    return {
        'objects': copy.deepcopy(OBJECTS),
        'responses': copy.deepcopy(RESPONSES),
        'methods_definitions': copy.deepcopy(METHODS),
        'errors': copy.deepcopy(ERRORS),
    }
