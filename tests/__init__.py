from unittest import TestCase

from flask import json, Flask
import requests_mock

from flask_restmapper import API, Resource, TypeRegistry


class BaseTestCase(TestCase):
    """
    Binds an :class:`API` to a Flask app and mocks all HTTP traffic with :mod:`requests_mock`.
    """

    def setUp(self):
        self.app = self.create_app()
        self.mock = requests_mock.Mocker()
        self.mock.start()
        self.addCleanup(self.mock.stop)
        self.api = API(self.app)

    def create_app(self):
        app = Flask(__name__)
        app.secret_key = 'XXX'
        app.debug = True
        return app

    def assertJSONEqual(self, first, second, msg=None):
        self.assertEqual(json.loads(json.dumps(first)), json.loads(json.dumps(second)), msg)

    def assertLastRequest(self, method, url, json=None):
        request = self.mock.last_request
        self.assertEqual(method, request.method)
        self.assertEqual(url, request.url)
        if json is not None:
            self.assertEqual(json, request.json())

    def pp(self, obj):
        print(json.dumps(obj, sort_keys=True, indent=4, separators=(',', ': ')))


def make_account_types():
    """
    Return a registry and a set of freshly defined resource types sharing it.
    """
    registry = TypeRegistry()

    @registry.register
    class Account(Resource):
        class Schema:
            id = None
            name = None
            is_active = True

        class Meta:
            server = 'api.example.com'
            path = '/accounts'

    @registry.register
    class User(Resource):
        class Schema:
            id = None
            account_id = None
            first_name = None
            email = None

        class Meta:
            server = 'api.example.com'
            path = '/accounts/:account_id/users'
            required_fields = ['first_name']

    return registry, Account, User
