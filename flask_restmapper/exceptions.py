from werkzeug.exceptions import (BadRequest as _BadRequest, Unauthorized as _Unauthorized,
                                 Forbidden as _Forbidden, NotFound, MethodNotAllowed as _MethodNotAllowed,
                                 Conflict as _Conflict, UnprocessableEntity as _UnprocessableEntity,
                                 InternalServerError as _InternalServerError)
from werkzeug.http import HTTP_STATUS_CODES


class RestMapperException(Exception):
    pass


class InvalidInput(RestMapperException, TypeError):
    """
    Raised when a resource is constructed or loaded from something that is not a mapping.
    """


class UnsupportedFormatter(RestMapperException):
    """
    Raised when a resource type is configured with a body or attribute formatter lacking ``encode``/``decode``.
    """

    def __init__(self, resource, formatter, kind='body'):
        super(UnsupportedFormatter, self).__init__(
            'Invalid {} formatter for {}: {!r}'.format(kind, resource.__name__, formatter))
        self.resource = resource
        self.formatter = formatter


class UnexpectedShape(RestMapperException, ValueError):
    """
    Raised when a decoded payload does not have the shape an operation expects.
    """


class PathError(RestMapperException, ValueError):
    pass


class InvalidPath(PathError):
    pass


class BlankParameter(PathError):

    def __init__(self, parameter, template):
        super(BlankParameter, self).__init__('Blank parameter :{} in path {}'.format(parameter, template))
        self.parameter = parameter
        self.template = template


class UnfilledParameter(PathError):

    def __init__(self, parameter, path, params=None):
        super(UnfilledParameter, self).__init__(
            'Unfilled parameter in path: :{} (path: {} params: {!r})'.format(parameter, path, params))
        self.parameter = parameter
        self.path = path


class MissingParameter(UnfilledParameter):
    pass


class TransportError(RestMapperException):
    """
    Raised when a request could not be completed, or completed with a response that cannot be used.
    """


class InvalidJSON(TransportError):
    pass


class HTTPError(TransportError):
    """
    A non-successful HTTP response. Subclasses are bound to the :mod:`werkzeug.exceptions` class for their status code.

    :param response: the transport response
    """
    werkzeug_exception = None

    def __init__(self, response):
        self.response = response
        super(HTTPError, self).__init__('{} {}'.format(self.status_code, self.description))

    @property
    def status_code(self):
        return self.response.status_code

    @property
    def description(self):
        return HTTP_STATUS_CODES.get(self.status_code, 'Unknown Error')

    def as_dict(self):
        return {
            'status': self.status_code,
            'message': self.description
        }

    @classmethod
    def for_response(cls, response):
        for exception in cls.__subclasses__():
            if exception.werkzeug_exception.code == response.status_code:
                return exception(response)
        return cls(response)


class BadRequest(HTTPError):
    werkzeug_exception = _BadRequest


class Unauthorized(HTTPError):
    werkzeug_exception = _Unauthorized


class Forbidden(HTTPError):
    werkzeug_exception = _Forbidden


class ResourceNotFound(HTTPError):
    werkzeug_exception = NotFound


class MethodNotAllowed(HTTPError):
    werkzeug_exception = _MethodNotAllowed


class Conflict(HTTPError):
    werkzeug_exception = _Conflict


class UnprocessableEntity(HTTPError):
    werkzeug_exception = _UnprocessableEntity


class InternalServerError(HTTPError):
    werkzeug_exception = _InternalServerError
