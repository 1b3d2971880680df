"""
Recursive key transformation between the local underscore_case and the camelCase found on the wire.

Mapping values may be scalars, mappings or sequences, but sequences may only contain mappings or scalars.
"""
from collections.abc import Mapping

from .exceptions import UnexpectedShape
from .inflector import camelize, underscore

LOWER = 'lower'
UPPER = 'upper'


def transform_keys(value, key_transform):
    """
    Return a copy of ``value`` with every mapping key replaced by ``key_transform(str(key))``.

    :param value: a mapping, a list or tuple of mappings and scalars, or a scalar
    :param callable key_transform: takes a key and returns the transformed key
    :raises UnexpectedShape: if a sequence contains another sequence
    """
    if isinstance(value, Mapping):
        return {key_transform(str(key)): transform_keys(item, key_transform) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        transformed = []
        for item in value:
            if isinstance(item, (list, tuple)):
                raise UnexpectedShape('Sequences may only contain mappings or scalars, got {!r}'.format(item))
            transformed.append(transform_keys(item, key_transform))
        return transformed

    return value


def underscore_keys(value):
    return transform_keys(value, underscore)


def camelize_keys(value, case=LOWER):
    if case not in (LOWER, UPPER):
        raise ValueError('case must be {!r} or {!r}'.format(LOWER, UPPER))
    uppercase_first_letter = case == UPPER
    return transform_keys(value, lambda key: camelize(key, uppercase_first_letter))
