from flask import Blueprint, jsonify, request
from flask_login import login_required

from gameapi.api import created_response, current_caller, int_arg, no_content, page_response, payload
from gameapi.schemas import ItemCreate, ItemUpdate
from gameapi.services.resources import items as service

items = Blueprint('items', __name__)


@items.route('', methods=['GET'])
@login_required
def list_items():
    """Items ordered by rarity (highest first), then most recently acquired."""
    page = service.list(
        current_caller(),
        page=int_arg('page'),
        page_size=int_arg('pageSize'),
        player_id=int_arg('playerId'),
        item_type=request.args.get('itemType'),
        min_rarity=int_arg('minRarity'),
    )
    return page_response(page)


@items.route('/<int:item_id>', methods=['GET'])
@login_required
def get_item(item_id):
    return jsonify(service.get(current_caller(), item_id).to_dict())


@items.route('', methods=['POST'])
@login_required
def create_item():
    item = service.create(current_caller(), payload(ItemCreate))
    return created_response(item, 'items.get_item', item_id=item.id)


@items.route('/<int:item_id>', methods=['PUT'])
@login_required
def update_item(item_id):
    service.update(current_caller(), item_id, payload(ItemUpdate, partial=True))
    return no_content()


@items.route('/<int:item_id>', methods=['DELETE'])
@login_required
def delete_item(item_id):
    service.delete(current_caller(), item_id)
    return no_content()
