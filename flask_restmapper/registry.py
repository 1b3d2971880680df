from .inflector import pascalize


class TypeRegistry(object):
    """
    Maps short type names to :class:`Resource` classes. Nested mappings and sequences received from the wire are
    only turned into resources when their key names a registered type.

    Resources are registered explicitly, either by calling :meth:`register` or by using it as a class decorator:

    .. code-block:: python

        registry = TypeRegistry()

        @registry.register
        class Address(Resource):
            class Schema:
                street = None

    :param resources: resource classes to register
    """

    def __init__(self, *resources):
        self.resources = {}
        for resource in resources:
            self.register(resource)

    @staticmethod
    def normalize(name):
        """
        Return the innermost, PascalCase form of a type name: ``"billing.invoice_line"`` becomes ``"InvoiceLine"``.
        """
        return pascalize(str(name).rsplit('.', 1)[-1])

    def register(self, resource, name=None):
        """
        Add a :class:`Resource` class to the registry.

        :param resource: resource class
        :param str name: optional type name; defaults to the class name
        :return: the resource class
        """
        bound = resource.__dict__.get('registry')
        if bound is not None and bound is not self:
            raise RuntimeError('Attempted to register a resource that is already registered with a different '
                               'TypeRegistry.')

        resource.registry = self
        self.resources[self.normalize(name or resource.__name__)] = resource
        return resource

    def find_resource_type(self, name):
        """
        :return: the resource class registered for ``name``, or ``None``
        """
        return self.resources.get(self.normalize(name))

    def __contains__(self, name):
        return self.find_resource_type(name) is not None

    def __len__(self):
        return len(self.resources)

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, sorted(self.resources))
