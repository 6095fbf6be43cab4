"""Ownership authority: who may act on a player's resources.

Admins may act on anything. Everyone else may act only on rows owned by one
of their own players. Rows without an owning player (unowned items) follow
the ``UNOWNED_ITEMS_POLICY`` setting.
"""
from typing import Optional

from flask import current_app

from gameapi import db
from gameapi.errors import Forbidden, NotFound
from gameapi.models import Player

POLICY_OPEN = 'open'
POLICY_ADMIN = 'admin'


def authorize(caller, player_id: int) -> bool:
    if caller.is_admin:
        return True
    player = db.session.get(Player, player_id)
    return player is not None and player.user_id == caller.id


def authorize_unowned(caller, write: bool) -> bool:
    policy = current_app.config.get('UNOWNED_ITEMS_POLICY', POLICY_OPEN)
    if policy == POLICY_ADMIN and write:
        return caller.is_admin
    return True


def require_access(caller, player_id: Optional[int], write: bool = False) -> None:
    """Raise Forbidden unless ``caller`` may act on ``player_id``'s resources.

    ``player_id`` of None means an unowned row.
    """
    if player_id is None:
        allowed = authorize_unowned(caller, write)
    else:
        allowed = authorize(caller, player_id)
    if not allowed:
        current_app.logger.info(
            f"[access] denied caller={caller.id} role={caller.role} player={player_id} write={write}"
        )
        raise Forbidden()


def require_player(player_id: int) -> Player:
    """Load the target player of a create; only reachable as NotFound by admins."""
    player = db.session.get(Player, player_id)
    if player is None:
        raise NotFound('Player not found')
    return player


def owned_player_ids(caller):
    """Select of the ids of the caller's own players, for use with ``in_()``."""
    return db.select(Player.id).where(Player.user_id == caller.id)
