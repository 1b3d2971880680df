from flask import Flask, jsonify

from flask_restmapper import API, Resource, TypeRegistry, fields

app = Flask(__name__)
app.config['RESTMAPPER_USER'] = 'admin'
app.config['RESTMAPPER_PASSWORD'] = 'secret'

api = API(app)
registry = TypeRegistry()


class Base(Resource):
    class Meta:
        server = 'api.example.com'


@registry.register
class Author(Base):
    class Schema:
        id = None
        name = fields.String(min_length=1)

    class Meta:
        path = '/authors'
        required_fields = ['name']


@registry.register
class Book(Base):
    class Schema:
        id = None
        title = fields.String()
        year_published = fields.Integer(minimum=1400)
        author = None

    class Meta:
        path = '/authors/:author_id/books'


@app.route('/authors/<int:author_id>/books')
def books(author_id):
    items = api.find_many(Book, {'author_id': author_id}, {'order_by': 'year_published'})
    return jsonify([book.attributes_for_wire() for book in items])


@app.route('/authors', methods=['POST'])
def create_author():
    author = Author(name='Ursula K. Le Guin')
    if not api.save(author):
        return jsonify(errors=author.errors), 422
    return jsonify(author.attributes_for_wire()), 201


if __name__ == '__main__':
    app.run()
