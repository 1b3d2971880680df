"""
Path templates such as ``/accounts/:account_id/users``.

Placeholders are filled from a mapping of parameters. A non-blank ``id`` parameter is appended as a trailing
``/<id>`` segment so that templates never need to declare ``:id`` themselves.
"""
import re

from werkzeug.utils import cached_property

from .exceptions import InvalidPath, BlankParameter, MissingParameter, UnfilledParameter
from .utils import is_blank, stringify_keys

__all__ = ('PathTemplate', 'fill_path')

_placeholder_re = re.compile(r':([A-Za-z0-9_]+)')


class PathTemplate(object):

    def __init__(self, template):
        if template is None:
            raise InvalidPath('Cannot fill a path without a template')
        self.template = template

    @cached_property
    def placeholders(self):
        return tuple(m.group(1) for m in _placeholder_re.finditer(self.template))

    def fill(self, params=None):
        params = stringify_keys(params or {})
        missing = []

        def substitute(match):
            name = match.group(1)
            if name not in params:
                missing.append(name)
                return match.group(0)

            value = params[name]
            if is_blank(value):
                raise BlankParameter(name, self.template)
            return str(value)

        path = _placeholder_re.sub(substitute, self.template)

        if missing:
            raise MissingParameter(missing[0], path, params)

        # values may themselves contain ":name" text
        unfilled = _placeholder_re.search(path)
        if unfilled:
            raise UnfilledParameter(unfilled.group(1), path, params)

        if not is_blank(params.get('id')):
            path = '{}/{}'.format(path, params['id'])

        return path

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self.template)


def fill_path(template, params=None):
    """
    Fill ``template`` with ``params``.

    >>> fill_path('/a/:x/b/:y', {'x': 1, 'y': 2, 'id': 3})
    '/a/1/b/2/3'

    :raises BlankParameter: if a placeholder's value is blank
    :raises MissingParameter: if a placeholder has no value
    :raises UnfilledParameter: if placeholder text is left in the path after substitution
    """
    return PathTemplate(template).fill(params)
