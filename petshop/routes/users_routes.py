# petshop/routes/users_routes.py
from flask_restx import Namespace, Resource, fields
from flask import request
from petshop.schemas.user_schema import validate_user_update
from petshop.services import user_service
from petshop.utils.auth_middleware import token_required, current_identity

users_ns = Namespace('users', description='Operações de usuários', path='/users')

user_update_model = users_ns.model('UserUpdate', {
    'nome': fields.String(),
    'email': fields.String(),
    'cpf': fields.String(description='11 dígitos'),
    'idade': fields.Integer(),
    'telefone': fields.String(description='(XX) 9XXXX-XXXX'),
})


@users_ns.route('')
class UserList(Resource):
    @token_required
    @users_ns.doc('list_users', security='BearerAuth')
    def get(self):
        """Lista todos os usuários"""
        return user_service.get_all_users(), 200

    @token_required
    @users_ns.doc('create_user', security='BearerAuth')
    def post(self):
        """Usuários são criados em POST /auth/register"""
        return {'message': 'Use POST /auth/register para criar novos usuários.'}, 405


@users_ns.route('/<string:user_id>')
class UserResource(Resource):
    @token_required
    @users_ns.doc('get_user', security='BearerAuth')
    def get(self, user_id):
        """Busca um usuário por ID"""
        return user_service.get_user(user_id), 200

    @token_required
    @users_ns.expect(user_update_model)
    @users_ns.doc('update_user', security='BearerAuth')
    def put(self, user_id):
        """Atualiza o próprio perfil"""
        data = validate_user_update(request.get_json(silent=True))
        user = user_service.update_user(user_id, data, current_identity()['id'])
        return {'message': 'Usuário atualizado com sucesso.', 'user': user}, 200

    @token_required
    @users_ns.doc('delete_user', security='BearerAuth')
    def delete(self, user_id):
        """Deleta o próprio perfil"""
        user_service.delete_user(user_id, current_identity()['id'])
        return '', 204
