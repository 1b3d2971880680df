from flask import json

from .exceptions import InvalidJSON
from .keys import camelize_keys, underscore_keys, LOWER, UPPER


class BodyFormatter(object):
    """
    Converts between structured values and the text sent over the wire.
    """

    def encode(self, value):
        raise NotImplementedError()

    def decode(self, text):
        raise NotImplementedError()


class AttributeFormatter(object):
    """
    Converts attribute keys between the wire convention (:meth:`encode`) and the local one (:meth:`decode`).
    """

    def encode(self, value):
        raise NotImplementedError()

    def decode(self, value):
        raise NotImplementedError()


class JSONFormatter(BodyFormatter):

    def encode(self, value):
        return json.dumps(value)

    def decode(self, text):
        if isinstance(text, bytes):
            text = text.decode('utf-8')
        try:
            return json.loads(text)
        except ValueError as e:
            raise InvalidJSON('Response is not valid JSON: {}'.format(e))


class TextFormatter(BodyFormatter):
    """
    Passes text through unchanged.
    """

    def encode(self, value):
        return value

    def decode(self, text):
        return text


class CamelCaseFormatter(AttributeFormatter):
    """
    :param bool lower: ``lowerCamelCase`` on the wire when ``True``, ``UpperCamelCase`` otherwise
    """

    def __init__(self, lower=True):
        self.case = LOWER if lower else UPPER

    def encode(self, value):
        return camelize_keys(value, self.case)

    def decode(self, value):
        return underscore_keys(value)

    def __repr__(self):
        return '{}(lower={})'.format(self.__class__.__name__, self.case == LOWER)
