from datetime import datetime, timezone

from gameapi import db, bcrypt

ROLE_PLAYER = 'Player'
ROLE_ADMIN = 'Admin'

# Upper bound of the 32-bit integer columns
INT_MAX = 2**31 - 1


def utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(16), nullable=False, default=ROLE_PLAYER)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)
    players = db.relationship('Player', back_populates='user', cascade='all, delete-orphan')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
            'createdAt': _iso(self.created_at),
            'lastLogin': _iso(self.last_login),
        }


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    level = db.Column(db.Integer, nullable=False, default=1)
    experience = db.Column(db.Integer, nullable=False, default=0)
    gold = db.Column(db.Integer, nullable=False, default=100)
    health = db.Column(db.Integer, nullable=False, default=100)
    max_health = db.Column(db.Integer, nullable=False, default=100)
    mana = db.Column(db.Integer, nullable=False, default=50)
    max_mana = db.Column(db.Integer, nullable=False, default=50)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    last_played = db.Column(db.DateTime(timezone=True), nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)

    user = db.relationship('User', back_populates='players')
    characters = db.relationship('Character', back_populates='player', cascade='all, delete-orphan')
    scores = db.relationship('Score', back_populates='player', cascade='all, delete-orphan')
    # No delete cascade: removing a player detaches its items instead
    items = db.relationship('Item', back_populates='player')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'level': self.level,
            'experience': self.experience,
            'gold': self.gold,
            'health': self.health,
            'maxHealth': self.max_health,
            'mana': self.mana,
            'maxMana': self.max_mana,
            'createdAt': _iso(self.created_at),
            'lastPlayed': _iso(self.last_played),
            'userId': self.user_id,
        }


class Character(db.Model):
    __tablename__ = 'character'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    character_class = db.Column(db.String(30), nullable=False)  # Warrior, Mage, Ranger, ...
    level = db.Column(db.Integer, nullable=False, default=1)
    experience = db.Column(db.Integer, nullable=False, default=0)
    strength = db.Column(db.Integer, nullable=False, default=10)
    intelligence = db.Column(db.Integer, nullable=False, default=10)
    dexterity = db.Column(db.Integer, nullable=False, default=10)
    vitality = db.Column(db.Integer, nullable=False, default=10)
    health = db.Column(db.Integer, nullable=False, default=100)
    max_health = db.Column(db.Integer, nullable=False, default=100)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id', ondelete='CASCADE'), nullable=False, index=True)

    player = db.relationship('Player', back_populates='characters')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'characterClass': self.character_class,
            'level': self.level,
            'experience': self.experience,
            'strength': self.strength,
            'intelligence': self.intelligence,
            'dexterity': self.dexterity,
            'vitality': self.vitality,
            'health': self.health,
            'maxHealth': self.max_health,
            'isActive': self.is_active,
            'createdAt': _iso(self.created_at),
            'playerId': self.player_id,
        }


class Item(db.Model):
    __tablename__ = 'item'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    description = db.Column(db.String(200), nullable=False, default='')
    item_type = db.Column(db.String(30), nullable=False)  # Weapon, Armor, Consumable, ...
    attack_bonus = db.Column(db.Integer, nullable=False, default=0)
    defense_bonus = db.Column(db.Integer, nullable=False, default=0)
    value = db.Column(db.Integer, nullable=False, default=0)
    rarity = db.Column(db.Integer, nullable=False, default=1)  # 1-10, 10 is legendary
    is_equipped = db.Column(db.Boolean, nullable=False, default=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    acquired_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id', ondelete='SET NULL'), nullable=True, index=True)

    player = db.relationship('Player', back_populates='items')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'itemType': self.item_type,
            'attackBonus': self.attack_bonus,
            'defenseBonus': self.defense_bonus,
            'value': self.value,
            'rarity': self.rarity,
            'isEquipped': self.is_equipped,
            'quantity': self.quantity,
            'acquiredAt': _iso(self.acquired_at),
            'playerId': self.player_id,
        }


class Score(db.Model):
    __tablename__ = 'score'
    id = db.Column(db.Integer, primary_key=True)
    game_mode = db.Column(db.String(50), nullable=False)  # Arena, Quest, Dungeon, ...
    points = db.Column(db.Integer, nullable=False, default=0)
    kills = db.Column(db.Integer, nullable=False, default=0)
    deaths = db.Column(db.Integer, nullable=False, default=0)
    time_played = db.Column(db.Float, nullable=False, default=0.0)  # seconds
    difficulty_level = db.Column(db.Integer, nullable=False, default=1)
    is_high_score = db.Column(db.Boolean, nullable=False, default=False)
    achieved_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id', ondelete='CASCADE'), nullable=False)

    player = db.relationship('Player', back_populates='scores')

    __table_args__ = (
        db.Index('ix_score_player_mode', 'player_id', 'game_mode'),
        # At most one flagged high score per (player, game mode)
        db.Index(
            'ix_score_one_high_per_mode', 'player_id', 'game_mode',
            unique=True,
            sqlite_where=db.text('is_high_score = 1'),
            postgresql_where=db.text('is_high_score'),
        ),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'gameMode': self.game_mode,
            'points': self.points,
            'kills': self.kills,
            'deaths': self.deaths,
            'timePlayed': self.time_played,
            'difficultyLevel': self.difficulty_level,
            'isHighScore': self.is_high_score,
            'achievedAt': _iso(self.achieved_at),
            'playerId': self.player_id,
        }
