from flask import Blueprint, jsonify
from flask_login import login_required

from gameapi.api import created_response, current_caller, int_arg, no_content, page_response, payload
from gameapi.schemas import PlayerCreate, PlayerUpdate
from gameapi.services.resources import players as service

players = Blueprint('players', __name__)


@players.route('', methods=['GET'])
@login_required
def list_players():
    """All players for admins, otherwise the caller's own."""
    page = service.list(current_caller(), page=int_arg('page'), page_size=int_arg('pageSize'))
    return page_response(page)


@players.route('/<int:player_id>', methods=['GET'])
@login_required
def get_player(player_id):
    return jsonify(service.get(current_caller(), player_id).to_dict())


@players.route('', methods=['POST'])
@login_required
def create_player():
    player = service.create(current_caller(), payload(PlayerCreate))
    return created_response(player, 'players.get_player', player_id=player.id)


@players.route('/<int:player_id>', methods=['PUT'])
@login_required
def update_player(player_id):
    service.update(current_caller(), player_id, payload(PlayerUpdate, partial=True))
    return no_content()


@players.route('/<int:player_id>', methods=['DELETE'])
@login_required
def delete_player(player_id):
    """Deletes the player with its characters and scores; its items become unowned."""
    service.delete(current_caller(), player_id)
    return no_content()
