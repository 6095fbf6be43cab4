from flask import Blueprint, jsonify, request
from flask_login import login_required

from gameapi.api import created_response, current_caller, int_arg, no_content, page_response, payload
from gameapi.schemas import CharacterCreate, CharacterUpdate
from gameapi.services.resources import characters as service

characters = Blueprint('characters', __name__)


@characters.route('', methods=['GET'])
@login_required
def list_characters():
    page = service.list(
        current_caller(),
        page=int_arg('page'),
        page_size=int_arg('pageSize'),
        player_id=int_arg('playerId'),
        character_class=request.args.get('characterClass'),
    )
    return page_response(page)


@characters.route('/<int:character_id>', methods=['GET'])
@login_required
def get_character(character_id):
    return jsonify(service.get(current_caller(), character_id).to_dict())


@characters.route('', methods=['POST'])
@login_required
def create_character():
    character = service.create(current_caller(), payload(CharacterCreate))
    return created_response(character, 'characters.get_character', character_id=character.id)


@characters.route('/<int:character_id>', methods=['PUT'])
@login_required
def update_character(character_id):
    service.update(current_caller(), character_id, payload(CharacterUpdate, partial=True))
    return no_content()


@characters.route('/<int:character_id>', methods=['DELETE'])
@login_required
def delete_character(character_id):
    service.delete(current_caller(), character_id)
    return no_content()
