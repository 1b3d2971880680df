import requests

from .exceptions import TransportError


class RequestsTransport(object):
    """
    Issues HTTP requests with a :class:`requests.Session`.

    A transport is any object with a ``request(method, url, data=None, headers=None)`` method returning a response
    with ``status_code``, ``text`` and ``headers`` attributes. Responses are returned whatever their status code.

    :param session: an optional :class:`requests.Session`
    :param float timeout: an optional timeout in seconds
    """

    def __init__(self, session=None, timeout=None):
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method, url, data=None, headers=None):
        if isinstance(data, str):
            data = data.encode('utf-8')
        try:
            return self.session.request(method, url, data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError('{} {} failed: {}'.format(method, url, e)) from e

    def close(self):
        self.session.close()
