from collections import OrderedDict
import copy

from jsonschema import Draft4Validator, FormatChecker
from werkzeug.utils import cached_property

from .exceptions import UnexpectedShape


class Schema(object):
    """
    The base class for all types with a JSON-schema. Any class inheriting from schema needs to implement
    :meth:`schema`.
    """

    def schema(self):
        """
        Abstract method returning the JSON-schema describing the wire representation.
        """
        raise NotImplementedError()

    @cached_property
    def _validator(self):
        schema = self.schema()
        Draft4Validator.check_schema(schema)
        return Draft4Validator(schema, format_checker=FormatChecker())

    def iter_errors(self, instance):
        return self._validator.iter_errors(instance)

    def format(self, value):
        """
        Formats a python object for the wire. Noop by default.
        """
        return value

    def convert(self, instance):
        """
        Converts a value received from the wire into a python object. Noop by default.
        """
        return instance


class FieldSet(Schema):
    """
    The schema of a resource: an ordered mapping of attribute names to :class:`fields.Raw` objects, each of which
    carries the attribute's default value.

    :param fields: a mapping of ``{name: field}`` pairs
    :param required_fields: a list or tuple of field names that must be present when validating
    """

    def __init__(self, fields, required_fields=None):
        self.fields = OrderedDict((str(key), field) for key, field in fields.items())
        self.required = tuple(required_fields or ())

    def keys(self):
        return self.fields.keys()

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def __contains__(self, key):
        return key in self.fields

    def __getitem__(self, key):
        return self.fields[key]

    def __eq__(self, other):
        if not isinstance(other, FieldSet):
            return NotImplemented
        return list(self.keys()) == list(other.keys()) \
            and self.defaults() == other.defaults() \
            and self.required == other.required

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def copy(self):
        """
        Return a copy that can be changed without affecting this field set.
        """
        return FieldSet(OrderedDict((key, copy.copy(field)) for key, field in self.fields.items()),
                        self.required)

    def defaults(self):
        return OrderedDict((key, copy.deepcopy(field.default)) for key, field in self.fields.items())

    def schema(self):
        schema = {
            "type": "object",
            "properties": OrderedDict((key, field.schema()) for key, field in self.fields.items())
        }

        if self.required:
            schema['required'] = list(self.required)
        return schema

    def validate(self, attributes):
        """
        Validate a resource's attributes. Values are formatted for the wire first; values a field cannot format are
        reported instead of being passed on to the JSON-schema check.

        :return: a list of error messages, empty if the attributes are valid
        """
        messages = []
        formatted = OrderedDict()
        for key, value in attributes.items():
            if key in self.fields:
                try:
                    value = self.fields[key].format(value)
                except (AttributeError, TypeError, ValueError) as e:
                    messages.append('{}: {}'.format(key, e))
                    continue
            formatted[key] = value

        for error in self.iter_errors(formatted):
            path = '.'.join(str(p) for p in error.absolute_path)
            messages.append('{}: {}'.format(path, error.message) if path else error.message)
        return messages

    def format(self, attributes):
        return OrderedDict((key, self.fields[key].format(value) if key in self.fields else value)
                           for key, value in attributes.items())

    def convert_value(self, key, value):
        """
        Convert a single value with the field for ``key``; values without a field are returned unchanged.

        :raises UnexpectedShape: if the field cannot convert the value
        """
        if key not in self.fields:
            return value
        try:
            return self.fields[key].convert(value)
        except (AttributeError, TypeError, ValueError) as e:
            raise UnexpectedShape('Invalid value for {}: {!r} ({})'.format(key, value, e)) from e

    def convert(self, attributes):
        return OrderedDict((key, self.convert_value(key, value)) for key, value in attributes.items())

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(self.fields))
