from flask_restx import Namespace, Resource, fields, reqparse, inputs
from flask import request, current_app
from petshop.models import Porte
from petshop.schemas.dog_schema import validate_dog
from petshop.services import dog_service
from petshop.utils.auth_middleware import token_required, current_identity

dog_ns = Namespace('dogs', description='Cadastro de cães do usuário', path='/dogs')

dog_model = dog_ns.model('Dog', {
    'nome': fields.String(required=True),
    'idade': fields.Integer(required=True, min=1, max=20),
    'raca': fields.String(required=True, description='Raça conhecida pelo dog.ceo'),
    'porte': fields.String(required=True, enum=[p.value for p in Porte]),
})

dog_parser = reqparse.RequestParser()
dog_parser.add_argument('includeOwner', type=inputs.boolean, default=False, location='args',
                        help='Inclui os dados do dono')


def breed_validator():
    return current_app.extensions['breed_validator']


@dog_ns.route('')
class DogList(Resource):
    @token_required
    @dog_ns.doc('list_dogs', security='BearerAuth')
    def get(self):
        """Lista os cães do usuário logado"""
        return dog_service.get_dogs_for_owner(current_identity()['id']), 200

    @token_required
    @dog_ns.expect(dog_model)
    @dog_ns.doc('create_dog', security='BearerAuth')
    def post(self):
        """Cadastra um novo cão para o usuário logado"""
        data = validate_dog(request.get_json(silent=True), breed_validator())
        dog = dog_service.create_dog(data, current_identity()['id'])
        return {'message': 'Cachorro cadastrado com sucesso!', 'dog': dog}, 201


@dog_ns.route('/<string:dog_id>')
class DogResource(Resource):
    @token_required
    @dog_ns.expect(dog_parser)
    @dog_ns.doc('get_dog', security='BearerAuth')
    def get(self, dog_id):
        """Busca um cão por ID"""
        args = dog_parser.parse_args()
        return dog_service.get_dog(dog_id, current_identity()['id'], include_owner=args['includeOwner']), 200

    @token_required
    @dog_ns.expect(dog_model)
    @dog_ns.doc('update_dog', security='BearerAuth')
    def put(self, dog_id):
        """Atualiza um cão (apenas o dono)"""
        data = validate_dog(request.get_json(silent=True), breed_validator(), partial=True)
        dog = dog_service.update_dog(dog_id, data, current_identity()['id'])
        return {'message': 'Cachorro atualizado com sucesso.', 'dog': dog}, 200

    @token_required
    @dog_ns.doc('delete_dog', security='BearerAuth')
    def delete(self, dog_id):
        """Deleta um cão (apenas o dono)"""
        dog_service.delete_dog(dog_id, current_identity()['id'])
        return '', 204
