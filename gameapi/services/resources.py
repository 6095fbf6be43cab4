"""Ownership-checked CRUD over players, characters, items and scores.

A single ``ResourceService`` carries the list/get/create/update/delete flow
and the ownership checks; each resource is an instance of it configured with
its model, how to find a row's owning player, its seed defaults, its list
filters and ordering.
"""
from collections import namedtuple
from typing import Callable, Dict, Optional, Sequence

from flask import current_app

from gameapi import db
from gameapi.errors import NotFound
from gameapi.models import INT_MAX, Character, Item, Player, Score, utcnow
from gameapi.services import ranking
from gameapi.services.ownership import owned_player_ids, require_access, require_player

Page = namedtuple('Page', ['items', 'total', 'page', 'page_size'])


def clamp_page(page: Optional[int], page_size: Optional[int]):
    cfg = current_app.config
    size = ranking.clamp_size(page_size, int(cfg.get('DEFAULT_PAGE_SIZE', 10)), int(cfg.get('MAX_PAGE_SIZE', 100)))
    return max(page or 1, 1), size


class ResourceService:
    def __init__(self, model, label: str, *,
                 owner_of: Callable,
                 scope: Callable,
                 filter_by_player: Callable,
                 owner_field: Optional[str] = 'player_id',
                 seed: Optional[Callable] = None,
                 filters: Optional[Dict[str, Callable]] = None,
                 order_by: Sequence = (),
                 creator: Optional[Callable] = None,
                 remover: Optional[Callable] = None,
                 on_update: Optional[Callable] = None):
        self.model = model
        self.label = label
        self.owner_of = owner_of
        self.scope = scope
        self.filter_by_player = filter_by_player
        self.owner_field = owner_field
        self.seed = seed
        self.filters = filters or {}
        self.order_by = tuple(order_by)
        self.creator = creator
        self.remover = remover
        self.on_update = on_update

    def _load(self, caller, row_id: int, write: bool = False):
        row = db.session.get(self.model, row_id) if row_id <= INT_MAX else None
        if row is None:
            raise NotFound(f'{self.label} not found')
        require_access(caller, self.owner_of(row), write=write)
        return row

    def list(self, caller, page=None, page_size=None, player_id=None, **filters) -> Page:
        page, page_size = clamp_page(page, page_size)
        query = self.model.query
        if player_id is not None:
            require_access(caller, player_id)
            query = query.filter(self.filter_by_player(player_id))
        elif not caller.is_admin:
            query = query.filter(self.scope(caller))

        for name, value in filters.items():
            if value is None or value == '' or value is False:
                continue
            query = query.filter(self.filters[name](value))

        total = query.count()
        rows = (
            query.order_by(*self.order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return Page(rows, total, page, page_size)

    def get(self, caller, row_id: int):
        return self._load(caller, row_id)

    def create(self, caller, fields: dict):
        fields = dict(fields)
        if self.owner_field:
            target = fields.get(self.owner_field)
            require_access(caller, target, write=True)
            if target is not None:
                require_player(target)
        if self.seed:
            fields.update(self.seed(caller))

        if self.creator:
            row = self.creator(fields)
        else:
            row = self.model(**fields)
            db.session.add(row)
            db.session.commit()
        current_app.logger.info(f"[{self.label.lower()}] created id={row.id} by user={caller.id}")
        return row

    def update(self, caller, row_id: int, fields: dict):
        row = self._load(caller, row_id, write=True)
        # Partial update: only fields present in the request are applied
        for name, value in fields.items():
            setattr(row, name, value)
        if self.on_update:
            self.on_update(row)
        db.session.commit()
        current_app.logger.info(f"[{self.label.lower()}] updated id={row.id} fields={sorted(fields)} by user={caller.id}")
        return row

    def delete(self, caller, row_id: int) -> None:
        row = self._load(caller, row_id, write=True)
        if self.remover:
            self.remover(row)
        else:
            db.session.delete(row)
            db.session.commit()
        current_app.logger.info(f"[{self.label.lower()}] deleted id={row_id} by user={caller.id}")


def _seed_player(caller):
    return {
        'user_id': caller.id,
        'level': 1,
        'experience': 0,
        'gold': 100,
        'health': 100,
        'max_health': 100,
        'mana': 50,
        'max_mana': 50,
        'created_at': utcnow(),
    }


def _seed_character(caller):
    return {
        'level': 1,
        'experience': 0,
        'strength': 10,
        'intelligence': 10,
        'dexterity': 10,
        'vitality': 10,
        'health': 100,
        'max_health': 100,
        'is_active': True,
        'created_at': utcnow(),
    }


def _seed_item(caller):
    return {'is_equipped': False, 'acquired_at': utcnow()}


def _touch_player(player):
    player.last_played = utcnow()


def _submit_score(fields):
    return ranking.submit_score(**fields)


def _ci_equals(column):
    return lambda value: db.func.lower(column) == value.lower()


players = ResourceService(
    Player, 'Player',
    owner_of=lambda row: row.id,
    scope=lambda caller: Player.user_id == caller.id,
    filter_by_player=lambda player_id: Player.id == player_id,
    owner_field=None,
    seed=_seed_player,
    order_by=(Player.created_at.desc(), Player.id.desc()),
    on_update=_touch_player,
)

characters = ResourceService(
    Character, 'Character',
    owner_of=lambda row: row.player_id,
    scope=lambda caller: Character.player_id.in_(owned_player_ids(caller)),
    filter_by_player=lambda player_id: Character.player_id == player_id,
    seed=_seed_character,
    filters={'character_class': _ci_equals(Character.character_class)},
    order_by=(Character.created_at.desc(), Character.id.desc()),
)

items = ResourceService(
    Item, 'Item',
    owner_of=lambda row: row.player_id,
    scope=lambda caller: Item.player_id.in_(owned_player_ids(caller)),
    filter_by_player=lambda player_id: Item.player_id == player_id,
    seed=_seed_item,
    filters={
        'item_type': _ci_equals(Item.item_type),
        'min_rarity': lambda value: Item.rarity >= value,
    },
    order_by=(Item.rarity.desc(), Item.acquired_at.desc(), Item.id.desc()),
)

scores = ResourceService(
    Score, 'Score',
    owner_of=lambda row: row.player_id,
    scope=lambda caller: Score.player_id.in_(owned_player_ids(caller)),
    filter_by_player=lambda player_id: Score.player_id == player_id,
    filters={
        'game_mode': _ci_equals(Score.game_mode),
        'high_scores_only': lambda value: Score.is_high_score.is_(True),
    },
    order_by=(Score.points.desc(), Score.achieved_at.desc(), Score.id.desc()),
    creator=_submit_score,
    remover=ranking.remove_score,
)
