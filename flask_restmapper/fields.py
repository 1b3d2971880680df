from datetime import date, datetime, timezone
import uuid

import aniso8601

from flask_restmapper.schema import Schema


class Raw(Schema):
    """
    This is the base class for all field types, can be given any JSON-schema.

    >>> f = fields.Raw({"type": "string"}, default="foo")
    >>> f.schema()
    {'type': 'string', 'default': 'foo'}

    :param schema: JSON-schema for field, or :class:`callable` resolving to a JSON-schema when called
    :param default: optional default value; may be a callable with no arguments
    :param nullable: whether the field is nullable
    :param title: optional title for JSON schema
    :param description: optional description for JSON schema
    """

    def __init__(self, schema, default=None, nullable=False, title=None, description=None):
        self._schema = schema
        self._default = default
        self.nullable = nullable
        self.title = title
        self.description = description

    def _finalize_schema(self, schema):
        """
        :return: new schema updated for field `nullable`, `title`, `description` and `default` attributes.
        """
        schema = dict(schema)

        if "null" in schema.get("type", []):
            self.nullable = True
        elif self.nullable and "type" in schema:
            type_ = schema["type"]
            if isinstance(type_, str):
                schema["type"] = [type_, "null"]
            else:
                schema["type"] = list(type_) + ["null"]

        for attr in ("default", "title", "description"):
            value = getattr(self, attr)
            if value is not None and not callable(value):
                try:
                    schema[attr] = self.format(value)
                except (AttributeError, TypeError, ValueError):
                    pass
        return schema

    @property
    def default(self):
        if callable(self._default):
            return self._default()
        return self._default

    @default.setter
    def default(self, value):
        self._default = value

    def schema(self):
        """
        JSON schema representation
        """
        schema = self._schema
        if callable(schema):
            schema = schema()
        if isinstance(schema, Schema):
            schema = schema.schema()
        return self._finalize_schema(schema)

    def format(self, value):
        """
        Format a Python value representation for the wire. Noop by default.
        """
        if value is not None:
            return self.formatter(value)
        return value

    def convert(self, value):
        """
        Convert a wire value representation to a Python object. Noop by default.
        """
        if value is not None:
            return self.converter(value)
        return value

    def formatter(self, value):
        return value

    def converter(self, value):
        return value

    def __repr__(self):
        return '{}(default={!r})'.format(self.__class__.__name__, self._default)


class Any(Raw):
    """
    A field type that allows any value.
    """

    def __init__(self, **kwargs):
        super(Any, self).__init__({}, **kwargs)


def _field_from_object(parent, cls_or_instance):
    if isinstance(cls_or_instance, type):
        container = cls_or_instance()
    else:
        container = cls_or_instance
    if not isinstance(container, Schema):
        raise RuntimeError('{} expected Raw or Schema, but got {}'.format(parent.__class__.__name__,
                                                                        container.__class__.__name__))
    if not isinstance(container, Raw):
        container = Raw(container)
    return container


def field_from_default(value):
    """
    Return ``value`` if it is a field; otherwise a field that accepts any value with ``value`` as its default.
    """
    if isinstance(value, Raw):
        return value
    if isinstance(value, type) and issubclass(value, Raw):
        return value()
    return Any(default=value)


class Custom(Raw):
    """
    A field type that can be passed any schema and optional formatter/converter transformers.

    :param dict schema: JSON-schema
    :param callable converter: convert function
    :param callable formatter: format function
    """

    def __init__(self, schema, converter=None, formatter=None, **kwargs):
        super(Custom, self).__init__(schema, **kwargs)
        self._converter = converter
        self._formatter = formatter

    def formatter(self, value):
        if self._formatter is None:
            return value
        return self._formatter(value)

    def converter(self, value):
        if self._converter is None:
            return value
        return self._converter(value)


class Array(Raw):
    """
    A field for an array of a given field type.

    :param Raw cls_or_instance: field class or instance
    :param int min_items: minimum number of items
    :param int max_items: maximum number of items
    :param bool unique: if ``True``, all values in the list must be unique
    """

    def __init__(self, cls_or_instance, min_items=None, max_items=None, unique=None, **kwargs):
        self.container = container = _field_from_object(self, cls_or_instance)

        schema_properties = [('type', 'array')]
        schema_properties += [(k, v) for k, v in [('minItems', min_items),
                                                  ('maxItems', max_items),
                                                  ('uniqueItems', unique)] if v is not None]

        super(Array, self).__init__(lambda: dict([('items', container.schema())] + schema_properties),
                                    default=kwargs.pop('default', list), **kwargs)

    def formatter(self, value):
        return [self.container.format(v) for v in value]

    def converter(self, value):
        return [self.container.convert(v) for v in value]


List = Array


class String(Raw):
    """
    :param int min_length: minimum length of string
    :param int max_length: maximum length of string
    :param str pattern: regex pattern that the string must match
    :param list enum: list of strings with enumeration
    """

    def __init__(self, min_length=None, max_length=None, pattern=None, enum=None, format=None, **kwargs):
        schema = {"type": "string"}

        if enum is not None:
            enum = list(enum)

        for v, k in ((min_length, 'minLength'),
                     (max_length, 'maxLength'),
                     (pattern, 'pattern'),
                     (enum, 'enum'),
                     (format, 'format')):
            if v is not None:
                schema[k] = v

        super(String, self).__init__(schema, **kwargs)


class UUID(String):
    """
    A field for UUID strings in canonical form. Converts to :class:`uuid.UUID`.
    """
    UUID_REGEX = "[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"

    def __init__(self, **kwargs):
        super(UUID, self).__init__(min_length=36, max_length=36, pattern=self.UUID_REGEX, **kwargs)

    def formatter(self, value):
        return str(value)

    def converter(self, value):
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class Uri(String):
    def __init__(self, **kwargs):
        super(Uri, self).__init__(format="uri", **kwargs)


class Email(String):
    def __init__(self, **kwargs):
        super(Email, self).__init__(format="email", **kwargs)


class Date(Raw):
    """
    A field for ISO8601-formatted date strings. Converts to :class:`datetime.date`.
    """

    def __init__(self, **kwargs):
        super(Date, self).__init__({"type": "string", "format": "date"}, **kwargs)

    def formatter(self, value):
        return value.strftime('%Y-%m-%d')

    def converter(self, value):
        if isinstance(value, date):
            return value
        return aniso8601.parse_date(value)


class DateTime(Raw):
    """
    A field for ISO8601-formatted date-time strings. Converts to :class:`datetime.datetime`.
    """

    def __init__(self, **kwargs):
        super(DateTime, self).__init__({"type": "string", "format": "date-time"}, **kwargs)

    def formatter(self, value):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

    def converter(self, value):
        if isinstance(value, datetime):
            return value
        return aniso8601.parse_datetime(value)


class Boolean(Raw):
    def __init__(self, **kwargs):
        super(Boolean, self).__init__({"type": "boolean"}, **kwargs)

    def formatter(self, value):
        return bool(value)


class Integer(Raw):

    def __init__(self, minimum=None, maximum=None, default=None, **kwargs):
        schema = {"type": "integer"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Integer, self).__init__(schema, default=default, **kwargs)

    def formatter(self, value):
        return int(value)


class PositiveInteger(Integer):
    """
    A :class:`Integer` field that only accepts integers >=1.
    """

    def __init__(self, maximum=None, **kwargs):
        super(PositiveInteger, self).__init__(minimum=1, maximum=maximum, **kwargs)


class Number(Raw):
    def __init__(self,
                 minimum=None,
                 maximum=None,
                 exclusive_minimum=False,
                 exclusive_maximum=False,
                 **kwargs):

        schema = {"type": "number"}

        if minimum is not None:
            schema['minimum'] = minimum
            if exclusive_minimum:
                schema['exclusiveMinimum'] = True

        if maximum is not None:
            schema['maximum'] = maximum
            if exclusive_maximum:
                schema['exclusiveMaximum'] = True

        super(Number, self).__init__(schema, **kwargs)

    def formatter(self, value):
        return float(value)
