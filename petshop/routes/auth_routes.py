from flask_restx import Namespace, Resource, fields
from flask import request
from petshop.schemas.user_schema import validate_register, validate_login
from petshop.services import auth_service, user_service
from petshop.utils.auth_middleware import token_required, current_identity

auth_ns = Namespace('auth', description='Autenticação de usuário', path='/auth')

register_model = auth_ns.model('Register', {
    'nome': fields.String(required=True, description='Nome completo'),
    'email': fields.String(required=True, description='E-mail'),
    'cpf': fields.String(required=True, description='CPF, 11 dígitos'),
    'idade': fields.Integer(required=True),
    'telefone': fields.String(description='(XX) 9XXXX-XXXX'),
    'password': fields.String(required=True, description='Senha, mínimo 8 caracteres')
})

login_model = auth_ns.model('Login', {
    'identifier': fields.String(required=True, description='E-mail ou CPF'),
    'password': fields.String(required=True, description='Senha')
})


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model)
    def post(self):
        """Registra um novo usuário"""
        data = validate_register(request.get_json(silent=True))
        return auth_service.register_user(data), 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Autentica com e-mail ou CPF e retorna um JWT"""
        data = validate_login(request.get_json(silent=True))
        return auth_service.login_user(data['identifier'], data['password']), 200


@auth_ns.route('/verify')
class VerifyToken(Resource):
    @token_required
    @auth_ns.doc('verify_token', security='BearerAuth')
    def get(self):
        """Verifica a validade do token"""
        return {
            'message': 'Token válido.',
            'user': user_service.get_user(current_identity()['id'])
        }, 200
