"""
Conversion between nested attribute mappings and trees of typed resources.
"""
from collections.abc import Mapping

from .inflector import pascalize, singularize


def _instantiate(resource, attributes, registry, from_wire):
    if from_wire:
        return resource.new_from_wire(attributes, registry)
    return resource().load(attributes, registry=registry)


def hash_to_objects(attributes, registry, from_wire=False):
    """
    Return a copy of ``attributes`` in which nested mappings and sequences of mappings are replaced by resources.

    The type of a nested mapping is looked up in ``registry`` by the PascalCase form of its key; the type of the
    elements of a sequence by the singular PascalCase form of its key, e.g. ``{"foo_bars": [{...}]}`` becomes a list
    of ``FooBar`` instances. Values with no matching type, and sequence elements that are not mappings, are left
    unchanged. Only the first level is converted here; each nested resource converts its own attributes with the
    same registry.

    :param dict attributes: attribute mapping
    :param TypeRegistry registry: registry used for type lookup; nothing is converted when ``None``
    :param bool from_wire: construct nested resources with :meth:`Resource.new_from_wire`
    """
    converted = dict(attributes)

    if registry is None:
        return converted

    for key, value in attributes.items():
        if isinstance(value, Mapping):
            resource = registry.find_resource_type(pascalize(key))
            if resource is not None:
                converted[key] = _instantiate(resource, value, registry, from_wire)
        elif isinstance(value, (list, tuple)):
            resource = registry.find_resource_type(pascalize(singularize(key)))
            if resource is not None:
                converted[key] = [_instantiate(resource, item, registry, from_wire) if isinstance(item, Mapping) else item
                                  for item in value]
    return converted


def objects_to_attributes(value):
    """
    Turn any nested resources back into mappings using their ``attributes_for_wire()``.
    """
    if hasattr(value, 'attributes_for_wire') and not isinstance(value, type):
        return value.attributes_for_wire()
    if isinstance(value, Mapping):
        return {str(key): objects_to_attributes(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [objects_to_attributes(item) for item in value]
    return value
