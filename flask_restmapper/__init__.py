from collections.abc import Mapping
import logging
from urllib.parse import quote

from . import signals
from .exceptions import HTTPError, UnexpectedShape, UnsupportedFormatter
from .formatters import JSONFormatter
from .graph import objects_to_attributes
from .keys import camelize_keys, underscore_keys
from .path import fill_path
from .registry import TypeRegistry
from .resource import Resource
from .transport import RequestsTransport
from .utils import is_blank, merge, to_query

__all__ = (
    'API',
    'Resource',
    'TypeRegistry',
    'exceptions',
    'fields',
    'formatters',
    'graph',
    'keys',
    'path',
    'registry',
    'schema',
    'signals',
    'transport',
)

DEFAULT_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}

_json = JSONFormatter()


def _append_query(url, query):
    return '{}{}{}'.format(url, '&' if '?' in url else '?', query)


class API(object):
    """
    All requests for resources are made through an :class:`API` object. It stores the settings shared by all
    resources: the transport, HTTP basic auth credentials, default headers and default path parameters.

    :class:`API` can be registered with a :class:`Flask` application, either upon initializing or later using
    :meth:`init_app()`, to read its settings from the application config.

    :param app: an optional :class:`Flask` instance
    :param dict default_path_parameters: parameters used to fill every path; parameters passed to a call win
    :param str user: optional user for HTTP basic auth
    :param str password: optional password for HTTP basic auth
    :param dict headers: optional headers sent with every request
    :param transport: an optional transport; defaults to a :class:`RequestsTransport`
    :param TypeRegistry registry: registry used to convert nested attributes of every resource loaded or saved
        through this API; resources fall back to their own :attr:`Resource.registry` when it is not given
    """

    def __init__(self, app=None, default_path_parameters=None, user=None, password=None, headers=None,
                 transport=None, registry=None):
        self.app = app
        self.user = user
        self.password = password
        self.default_path_parameters = merge(default_path_parameters)
        self.headers = dict(headers or {})
        self.transport = transport or RequestsTransport()
        self.registry = registry
        self.logger = logging.getLogger('flask_restmapper')
        self.last_response = None

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """
        :param app: a :class:`Flask` instance
        """
        app.config.setdefault('RESTMAPPER_USER', None)
        app.config.setdefault('RESTMAPPER_PASSWORD', None)
        app.config.setdefault('RESTMAPPER_DEFAULT_PATH_PARAMETERS', {})
        app.config.setdefault('RESTMAPPER_HEADERS', {})
        app.config.setdefault('RESTMAPPER_TIMEOUT', None)

        self.configure(app.config)
        self.logger = app.logger
        app.extensions['restmapper'] = self

    def configure(self, config):
        """
        Apply the ``RESTMAPPER_*`` settings found in ``config``. Settings that are not given keep their value.

        :param config: a mapping such as :attr:`Flask.config`
        """
        if config.get('RESTMAPPER_USER') is not None:
            self.user = config['RESTMAPPER_USER']
        if config.get('RESTMAPPER_PASSWORD') is not None:
            self.password = config['RESTMAPPER_PASSWORD']

        self.default_path_parameters = merge(self.default_path_parameters,
                                             config.get('RESTMAPPER_DEFAULT_PATH_PARAMETERS'))
        self.headers.update(config.get('RESTMAPPER_HEADERS') or {})

        if config.get('RESTMAPPER_TIMEOUT') is not None:
            self.transport.timeout = config['RESTMAPPER_TIMEOUT']

    @property
    def request_headers(self):
        """
        The headers sent with all requests.
        """
        headers = dict(DEFAULT_HEADERS)
        headers.update(self.headers)
        return headers

    def _auth(self):
        if self.user or self.password:
            return '{}:{}@'.format(quote(self.user or '', safe=''), quote(self.password or '', safe=''))
        return ''

    def _base_url(self, resource):
        return '{}://{}{}'.format(resource.meta.protocol, self._auth(), resource.meta.server or '')

    def _body_formatter(self, resource):
        formatter = resource.meta.get('body_formatter')
        if not (hasattr(formatter, 'encode') and hasattr(formatter, 'decode')):
            raise UnsupportedFormatter(resource, formatter)
        return formatter

    def _attribute_formatter(self, resource):
        formatter = resource.meta.get('attribute_formatter')
        if formatter is not None and not (hasattr(formatter, 'encode') and hasattr(formatter, 'decode')):
            raise UnsupportedFormatter(resource, formatter, kind='attribute')
        return formatter

    def _encode(self, resource, value):
        formatter = self._attribute_formatter(resource)
        if formatter is not None:
            value = formatter.encode(value)
        return self._body_formatter(resource).encode(value)

    def _decode(self, resource, text):
        value = self._body_formatter(resource).decode(text)
        formatter = self._attribute_formatter(resource)
        if formatter is not None:
            value = formatter.decode(value)
        return value

    def _send(self, method, url, payload=None, headers=None, accept=()):
        """
        Send a request through the transport.

        :param accept: status codes other than 2xx that are returned instead of raised
        :raises HTTPError: if the response status is not successful
        """
        self.logger.debug('%s %s', method, url)
        if payload is not None:
            self.logger.debug(' payload: %r', payload)

        request_headers = self.request_headers
        request_headers.update(headers or {})

        response = self.transport.request(method, url, data=payload, headers=request_headers)
        self.last_response = response

        if not 200 <= response.status_code < 300 and response.status_code not in accept:
            raise HTTPError.for_response(response)
        return response

    def url_for(self, resource, path_params_or_url=None, query_params=None):
        """
        Generate a full URL for the resource class ``resource``.

        A string starting with a slash is relative to the resource's server, and gets the resource's extension. Any
        other string is treated as a fully qualified URL and is not modified. Otherwise ``path_params_or_url`` is a
        mapping of parameters that are merged with the default path parameters and used to fill the resource path.

        :param resource: resource class
        :param path_params_or_url: a path, a URL or a mapping of path parameters
        :param dict query_params: optional query parameters; their keys are formatted with the attribute formatter
        """
        if isinstance(path_params_or_url, str):
            if path_params_or_url.startswith('/'):
                url = ''.join((self._base_url(resource), path_params_or_url, resource.meta.extension or ''))
            else:
                url = path_params_or_url
        else:
            path = fill_path(resource.meta.path, merge(self.default_path_parameters, path_params_or_url))
            url = ''.join((self._base_url(resource), path))

        if query_params:
            formatter = self._attribute_formatter(resource)
            if formatter is not None:
                query_params = formatter.encode(query_params)
            url = _append_query(url, to_query(query_params))
        return url

    def request(self, resource, method, path, payload=None, headers=None):
        """
        Issue a request of ``method`` for the resource class ``resource``. For PUT and POST requests, ``payload`` is
        encoded with the resource's formatters.

        :return: the transport response
        """
        method = method.upper()

        if path.startswith('/'):
            url = ''.join((self._base_url(resource), path))
        else:
            url = path

        data = None
        if method in ('PUT', 'POST'):
            data = self._encode(resource, payload or {})
        return self._send(method, url, data, headers)

    def find(self, resource, path_params_or_url=None, query_params=None):
        """
        GET a single resource.

        ``path_params_or_url`` is either a URL, a path, or a mapping of parameters to substitute into the path of
        ``resource``. If the parameters include ``id``, it is added to the end of the path. A resource instance may be
        passed instead of a class, in which case its path parameters are used.

        :return: an instance of ``resource``
        :raises HTTPError: if the server does not return a successful response, e.g. :class:`ResourceNotFound`
        """
        if isinstance(resource, Resource):
            path_params_or_url = resource.path_parameters()
            resource = resource.__class__

        url = self.url_for(resource, path_params_or_url, query_params)
        response = self._send('GET', url)

        attributes = self._decode(resource, response.text)
        if not isinstance(attributes, Mapping):
            raise UnexpectedShape('Response for {} did not parse to an object'.format(url))
        return resource.new_from_wire(attributes, self.registry)

    def find_many(self, resource, path_params_or_url=None, query_params=None):
        """
        GET a collection of resources. This works the same as :meth:`find`, except that it expects and returns a list
        of resources.
        """
        url = self.url_for(resource, path_params_or_url, query_params)
        response = self._send('GET', url)

        items = self._decode(resource, response.text)
        if not isinstance(items, list):
            raise UnexpectedShape('Response for {} did not parse to an array'.format(url))
        return [self._new_from_wire(resource, item) for item in items]

    def create(self, resource, attributes=None, url=None):
        """
        Create a resource of class ``resource`` from ``attributes`` merged over the default path parameters.

        :param str url: optional path or URL overriding the resource path
        :return: see :meth:`save`
        """
        item = resource(merge(self.default_path_parameters, attributes))
        return self.save(item, url)

    def save(self, item, url=None):
        """
        Save a resource: POST it if it has no ``id``, PUT it otherwise.

        :param Resource item: resource to save
        :param str url: optional path or URL overriding the resource path
        :return: ``False`` if the resource is invalid or the server rejected it with 422, after adding the errors to
            the resource. A list of new resources if the server returned a list. Otherwise the resource, updated with
            the returned attributes.
        :raises HTTPError: if the server responds with any other error
        """
        # mappings set after loading
        item.convert_attributes_to_objects(self.registry)
        return self._create_or_update(item, url)

    def _new_from_wire(self, resource, attributes):
        if not isinstance(attributes, Mapping):
            raise UnexpectedShape('Expected an object for {}, got {!r}'.format(resource.__name__, attributes))
        return resource.new_from_wire(attributes, self.registry)

    def _create_or_update(self, item, url=None):
        if not item.valid():
            return False

        resource = item.__class__
        path_parameters = item.path_parameters()
        payload = self._encode(resource, item.attributes_for_wire())

        if url is None:
            url = self.url_for(resource, path_parameters)
        else:
            url = self.url_for(resource, url)

        if is_blank(path_parameters.get('id')):
            method, before, after = 'POST', signals.before_create, signals.after_create
        else:
            method, before, after = 'PUT', signals.before_update, signals.after_update

        before.send(resource, item=item)
        response = self._send(method, url, payload, accept=(422,))

        if response.status_code == 422:
            self._handle_unprocessable(item, response)
            return False

        if is_blank(response.text):
            item.new_record = False
            after.send(resource, item=item)
            return item

        decoded = self._decode(resource, response.text)

        if isinstance(decoded, list):
            items = [self._new_from_wire(resource, attributes) for attributes in decoded]
            after.send(resource, item=item)
            return items

        if not isinstance(decoded, Mapping):
            raise UnexpectedShape('Response for {} did not parse to an object or array'.format(url))

        if 'errors' in decoded:
            self.logger.info('* Errors: %r', decoded['errors'])

        item.load_from_wire(decoded, self.registry)
        after.send(resource, item=item)
        return item

    def _handle_unprocessable(self, item, response):
        decoded = {} if is_blank(response.text) else self._decode(item.__class__, response.text)
        if not isinstance(decoded, Mapping) or 'errors' not in decoded:
            return

        errors = decoded['errors']
        self.logger.info('* Errors: %r', errors)

        if isinstance(errors, str):
            errors = [errors]
        elif isinstance(errors, Mapping):
            errors = ['{} {}'.format(key, message)
                      for key, messages in errors.items()
                      for message in (messages if isinstance(messages, list) else [messages])]
        item.handle_errors(errors)

    def delete(self, resource, path_params_or_url=None):
        """
        DELETE a resource.

        ``resource`` is either a resource class, with ``path_params_or_url`` resolving to the path of the resource to
        delete, or a resource instance whose path parameters are used unless a path or URL is given.

        :return: the transport response
        """
        item = None
        if isinstance(resource, Resource):
            item, resource = resource, resource.__class__
            if not isinstance(path_params_or_url, str):
                path_params_or_url = item.path_parameters()

        url = self.url_for(resource, path_params_or_url)

        signals.before_delete.send(resource, item=item, url=url)
        response = self._send('DELETE', url)
        signals.after_delete.send(resource, item=item, url=url)
        return response

    def _payload(self, payload):
        if isinstance(payload, str):
            return payload
        return _json.encode(camelize_keys(objects_to_attributes(payload)))

    def _parse(self, response, json):
        if not json or is_blank(response.text):
            return response.text
        return underscore_keys(_json.decode(response.text))

    def get(self, url, json=True, query_params=None, headers=None):
        """
        Issue a GET request to ``url``.

        :param bool json: when ``True`` the response is parsed as JSON and its keys are underscored; otherwise the body
            is returned as a string
        :param dict query_params: optional query parameters, whose keys are camelized
        :raises HTTPError: if the response status is not successful
        """
        if query_params:
            url = _append_query(url, to_query(camelize_keys(query_params)))
        return self._parse(self._send('GET', url, headers=headers), json)

    def put(self, url, payload, json=True, headers=None):
        """
        Issue a PUT request to ``url``.

        :param payload: a string sent as is, or a resource, mapping or list that is converted to JSON with
            camelized keys
        :param bool json: see :meth:`get`
        :raises HTTPError: if the response status is not successful, including 422
        """
        return self._parse(self._send('PUT', url, self._payload(payload), headers), json)

    def post(self, url, payload, json=True, headers=None):
        """
        Issue a POST request to ``url``. See :meth:`put`.
        """
        return self._parse(self._send('POST', url, self._payload(payload), headers), json)
