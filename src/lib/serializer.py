"""
Serializer for record invocations

The inverse of extraction: writes a record as one template call, one named
argument per line, in a fixed field order.

    {{Community Wishlist/Vote
    | username = Example
    | comment =
    | timestamp = 2025-01-01T00:00:00Z
    }}

A field whose value is "" is written as a bare key, a field that is missing
(or None) is left out, and keys outside field_order are ignored.
"""

from typing import Mapping, Optional, Sequence

TEMPLATE_NAMESPACE = 'Template:'


def templateName_clean(template_name: str) -> str:
    """Drop a leading "Template:" namespace from a template name"""
    if template_name.startswith(TEMPLATE_NAMESPACE):
        return template_name[len(TEMPLATE_NAMESPACE):]
    return template_name


def invocation_serialize(
    template_name: str,
    field_order: Sequence[str],
    record: Mapping[str, Optional[str]],
) -> str:
    """
    Write a record as template wikitext

    Args:
        template_name: Template to call; a "Template:" prefix is dropped
        field_order: Declared fields, in output order
        record: Field values; missing or None means absent

    Returns:
        Canonical invocation text

    Example:
        >>> invocation_serialize("Tgt", ["a", "b", "c"], {"a": "x", "b": ""})
        '{{Tgt\\n| a = x\\n| b =\\n}}'
    """
    out = ['{{', templateName_clean(template_name), '\n']
    for key in field_order:
        value = record.get(key)
        if value is None:
            continue
        if value == '':
            out.append(f'| {key} =\n')
        else:
            out.append(f'| {key} = {value}\n')
    out.append('}}')
    return ''.join(out)
