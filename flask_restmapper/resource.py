from collections import OrderedDict
from collections.abc import Mapping
from types import FunctionType

from .exceptions import InvalidInput
from .fields import Any, field_from_default
from .formatters import JSONFormatter, CamelCaseFormatter
from .graph import hash_to_objects, objects_to_attributes
from .path import fill_path
from .schema import FieldSet
from .utils import AttributeDict, stringify_keys


def _is_declaration(name, value):
    return not name.startswith('_') and not isinstance(value, (FunctionType, staticmethod, classmethod, property))


def _declared_field(value):
    # define_schema(name={"default": ...}) is the long form of define_schema(name=...)
    if isinstance(value, Mapping):
        return Any(default=value.get('default'))
    return field_from_default(value)


class ResourceMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ResourceMeta, mcs).__new__(mcs, name, bases, members)
        class_.meta = meta = AttributeDict(getattr(class_, 'meta', None) or {})

        if 'Meta' in members:
            for k, v in members['Meta'].__dict__.items():
                if not k.startswith('__'):
                    meta[k] = v

        if 'Schema' in members:
            declared = OrderedDict((k, field_from_default(v))
                                   for k, v in members['Schema'].__dict__.items() if _is_declaration(k, v))
            class_.schema = FieldSet(declared, required_fields=meta.get('required_fields', None))
        elif class_.schema is not None:
            class_.schema = class_.schema.copy()
            if 'Meta' in members and 'required_fields' in members['Meta'].__dict__:
                class_.schema.required = tuple(meta.required_fields or ())

        return class_


class Resource(object, metaclass=ResourceMeta):
    """
    A remote resource and the local mirror of its attributes.

    A resource is configured using the `Schema` and `Meta` attributes. Plain values in `Schema` are default values;
    :mod:`fields` add type coercion and validation:

    .. code-block:: python

        class User(Resource):
            class Schema:
                id = None
                name = 'John'
                created_at = fields.DateTime()

            class Meta:
                server = 'api.example.com'
                path = '/accounts/:account_id/users'

    Attributes are stored in :attr:`attributes`, a ``dict`` with ``str`` keys. They can be read and written with
    :meth:`get` and :meth:`set`, with item access, or as Python attributes (``user.name = 'Jane'``) as long as their
    name does not start with an underscore or clash with a member of the class.

    :class:`Meta` class attributes:

    =====================  ==============================  ==============================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================
    protocol               ``'http'``                      Protocol of the server
    server                 ``None``                        Host (and optional port and prefix) of the server
    path                   ``None``                        Path template, e.g. ``'/accounts/:account_id/users'``
    extension              ``''``                          Appended to relative URLs given as strings, e.g. ``'.json'``
    body_formatter         :class:`JSONFormatter`          Encodes payloads to and decodes responses from text
    attribute_formatter    :class:`CamelCaseFormatter`     Translates attribute keys between the wire and Python
    required_fields        ``None``                        Fields that must be present for the resource to be valid
    =====================  ==============================  ==============================================================

    .. attribute:: meta

        A :class:`AttributeDict` of configuration attributes collected from the :class:`Meta` attributes of the
        class and its base classes.

    .. attribute:: schema

        A :class:`FieldSet` built from the :class:`Schema` attribute, or copied from the base class.

    .. attribute:: registry

        The :class:`TypeRegistry` this resource is registered with, used to convert nested attributes.

    :param attributes: a mapping of attributes
    :raises InvalidInput: if ``attributes`` is not a mapping
    """
    meta = None
    schema = None
    registry = None

    _internal_attributes = frozenset(('attributes', 'errors', 'new_record'))

    class Meta:
        protocol = 'http'
        server = None
        path = None
        extension = ''
        body_formatter = JSONFormatter()
        attribute_formatter = CamelCaseFormatter()
        required_fields = None

    def __init__(self, attributes=None, **kwargs):
        if attributes is None:
            attributes = {}
        elif not isinstance(attributes, Mapping):
            raise InvalidInput('Attributes must be a mapping, got {!r}'.format(attributes))

        self.errors = []
        self.load(dict(attributes, **kwargs))

    @classmethod
    def define_schema(cls, *args, **kwargs):
        """
        Define the schema for this resource. Takes attribute names, ``{name: default}`` mappings and keyword arguments;
        a default may also be given in long form as ``{name: {'default': value}}``:

        .. code-block:: python

            User.define_schema('id', 'email', name='John')
            User.define_schema('id', {'name': {'default': 'John'}})

        :return: the schema, which is unchanged when called without arguments
        """
        if not args and not kwargs:
            return cls.schema

        if len(args) == 1 and isinstance(args[0], (list, tuple)):
            args = args[0]

        declared = OrderedDict()
        for attr in args:
            if isinstance(attr, Mapping):
                for k, v in attr.items():
                    declared[k] = _declared_field(v)
            else:
                declared[attr] = Any()
        for k, v in kwargs.items():
            declared[k] = _declared_field(v)

        cls.schema = FieldSet(declared, required_fields=cls.meta.get('required_fields', None))
        return cls.schema

    @classmethod
    def new_from_wire(cls, attributes, registry=None):
        """
        Create a resource from attributes received from the server. The resource is never a new record.

        :param TypeRegistry registry: registry used for nested resources; defaults to :attr:`registry`
        """
        resource = cls()
        resource.load_from_wire(attributes, registry)
        return resource

    @classmethod
    def fill_path(cls, params):
        return fill_path(cls.meta.path, params)

    def _registry(self, registry):
        return self.registry if registry is None else registry

    def load(self, attributes, from_wire=False, registry=None):
        """
        Replace the attributes of this resource with the schema defaults overlaid with ``attributes``.

        Attributes that are not part of the schema are kept; they are filtered in :meth:`attributes_for_wire`.

        :param attributes: a mapping of attributes
        :param bool from_wire: ``True`` if the attributes were received from the server
        :param TypeRegistry registry: registry used for nested resources; defaults to :attr:`registry`
        :raises InvalidInput: if ``attributes`` is not a mapping
        :raises UnexpectedShape: if a typed field cannot convert its value
        """
        if not isinstance(attributes, Mapping):
            raise InvalidInput('Attributes must be a mapping, got {!r}'.format(attributes))

        attributes = stringify_keys(attributes)
        self.new_record = not from_wire and 'id' not in attributes

        new_attributes = OrderedDict()
        if self.schema is not None:
            new_attributes.update(self.schema.defaults())
        new_attributes.update(attributes)

        if self.schema is not None:
            new_attributes = self.schema.convert(new_attributes)

        self.attributes = hash_to_objects(new_attributes, self._registry(registry), from_wire)
        return self

    def load_from_wire(self, attributes, registry=None):
        return self.load(attributes, True, registry)

    def convert_attributes_to_objects(self, registry=None):
        """
        Convert attribute mappings that represent resources into resources.
        """
        self.attributes = hash_to_objects(self.attributes, self._registry(registry))
        return self.attributes

    def _wire_attributes(self, format=True):
        attributes = objects_to_attributes({k: v for k, v in self.attributes.items() if v is not None})
        if format and self.schema is not None:
            attributes = self.schema.format(attributes)
        return dict(attributes)

    def attributes_for_wire(self):
        """
        Return the attributes to send to the server when this resource is saved: all attributes that are not
        ``None``, limited to the schema if one is defined, with nested resources converted back to mappings.
        """
        attributes = self._wire_attributes()
        if self.schema is not None:
            attributes = {k: v for k, v in attributes.items() if k in self.schema}
        return attributes

    def path_parameters(self):
        """
        Return the parameters used to fill the path of this resource. Unlike :meth:`attributes_for_wire`, these are
        not limited to the schema.
        """
        return self._wire_attributes()

    def validate(self):
        """
        Return the validation errors of this resource. Override to add validation rules.

        :return: an iterable of error messages
        """
        if self.schema is None:
            return []
        attributes = self._wire_attributes(format=False)
        return self.schema.validate({k: v for k, v in attributes.items() if k in self.schema})

    def valid(self):
        self.errors = list(self.validate())
        return not self.errors

    def handle_errors(self, errors):
        """
        Add errors received from the server to :attr:`errors`.
        """
        for error in errors:
            self.errors.append(error)

    @property
    def id(self):
        return self.attributes.get('id')

    @id.setter
    def id(self, value):
        self.set('id', value)

    @property
    def persisted(self):
        return not self.new_record

    def get(self, name, default=None):
        return self.attributes.get(str(name), default)

    def set(self, name, value):
        name = str(name)
        if self.schema is not None and name in self.schema:
            value = self.schema.convert_value(name, value)
        self.attributes[name] = value

    def __getitem__(self, name):
        return self.attributes[str(name)]

    def __setitem__(self, name, value):
        self.set(name, value)

    def __contains__(self, name):
        return str(name) in self.attributes

    def __getattr__(self, name):
        if not name.startswith('_'):
            attributes = self.__dict__.get('attributes')
            if attributes is not None and name in attributes:
                return attributes[name]
        raise AttributeError("'{}' object has no attribute '{}'".format(self.__class__.__name__, name))

    def __setattr__(self, name, value):
        if name.startswith('_') or name in self._internal_attributes or hasattr(self.__class__, name):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __eq__(self, other):
        # equality is defined as having the same attributes
        if not hasattr(other, 'attributes'):
            return False
        return self.attributes == other.attributes

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    def __repr__(self):
        return '<{} {!r}>'.format(self.__class__.__name__, self.attributes)
