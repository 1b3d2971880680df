from collections.abc import Mapping
from urllib.parse import urlencode


def is_blank(value):
    """
    ``None``, ``False``, whitespace-only strings and empty containers are blank; ``0`` is not.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple, set)):
        return not value
    return False


def stringify_keys(mapping):
    return {str(key): value for key, value in mapping.items()}


def merge(*mappings):
    """Merge mappings left to right into a new ``dict`` with ``str`` keys. Later mappings win."""
    merged = {}
    for mapping in mappings:
        if mapping:
            merged.update(stringify_keys(mapping))
    return merged


def _to_param(value):
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return '' if value is None else value


def to_query(params, namespace=None):
    """
    Encode a (possibly nested) mapping as a query string the way ActiveSupport's ``Hash#to_query`` does: keys are
    nested as ``a[b]``, sequence items as ``a[]``, and the encoded pairs of each mapping are sorted, e.g.
    ``{"ids": [1, 2], "filter": {"name": "x"}}`` becomes ``filter%5Bname%5D=x&ids%5B%5D=1&ids%5B%5D=2``.
    Empty mappings and sequences nested in a mapping are left out.
    """
    if isinstance(params, Mapping):
        parts = [to_query(value, '{}[{}]'.format(namespace, key) if namespace else str(key))
                 for key, value in params.items()
                 if not (isinstance(value, (Mapping, list, tuple)) and not value)]
        # pairs below an array keep their order
        if namespace is None or '[]' not in namespace:
            parts.sort()
        return '&'.join(parts)
    if isinstance(params, (list, tuple)):
        prefix = '{}[]'.format(namespace)
        if not params:
            return to_query(None, prefix)
        return '&'.join(to_query(item, prefix) for item in params)
    return urlencode([(namespace, _to_param(params))])


class AttributeDict(dict):
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
