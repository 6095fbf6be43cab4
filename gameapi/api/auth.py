from flask import Blueprint, jsonify

from gameapi.api import payload
from gameapi.schemas import LoginRequest, RegisterRequest
from gameapi.services import credentials, sessions

auth = Blueprint('auth', __name__)


def _session_body(user):
    token, expiration = sessions.issue(user)
    return {
        'token': token,
        'username': user.username,
        'email': user.email,
        'role': user.role,
        'expiration': expiration.isoformat(),
    }


@auth.route('/register', methods=['POST'])
def register():
    data = payload(RegisterRequest)
    user = credentials.register(data['username'], data['email'], data['password'])
    return jsonify(_session_body(user)), 201


@auth.route('/login', methods=['POST'])
def login():
    data = payload(LoginRequest)
    user = credentials.login(data['username'], data['password'])
    return jsonify(_session_body(user))
