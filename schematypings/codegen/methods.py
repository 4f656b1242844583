"""Method definition patches applied before parameters are typed."""

import copy
from collections.abc import Mapping
from typing import Any

from schematypings.codegen.constants import BASE_BOOL_INT_REF, NEW_LINE
from schematypings.codegen.graph import DependencyGraph, ReferenceMark
from schematypings.codegen.utils import get_interface_name, get_object_name_by_ref

__all__ = ['normalize_method_info']


def normalize_method_info(
    method: Mapping[str, Any],
) -> tuple[dict[str, Any], DependencyGraph]:
    """Patch a method definition to match how the API reads parameters.

    * ``boolean`` parameters are sent as ``0``/``1``, they are retyped as a
      reference to the bool-int sentinel.
    * ``array`` parameters are sent as a comma-separated string.
    * parameters whose items reference an object get an ``@see`` line, and the
      object is still generated so the reference resolves.

    The input is left untouched.

    Returns:
        The patched method and the objects referenced by parameter items.
    """
    method = copy.deepcopy(dict(method))
    parameter_refs = DependencyGraph()

    for parameter in method.get('parameters') or []:
        if not isinstance(parameter, dict):
            continue

        if parameter.get('type') == 'boolean':
            del parameter['type']
            parameter['$ref'] = BASE_BOOL_INT_REF

        if parameter.get('type') == 'array':
            parameter['type'] = 'string'

        if not parameter.get('description'):
            parameter['description'] = ''

        items = parameter.get('items')
        if isinstance(items, dict) and items.get('$ref'):
            ref = items['$ref']
            parameter_refs.mark(get_object_name_by_ref(ref), ReferenceMark.GENERATE_ONLY)
            interface_name = get_interface_name(get_object_name_by_ref(ref))
            parameter['description'] += NEW_LINE * 2 + f'@see {interface_name} ({ref})'

    return method, parameter_refs
