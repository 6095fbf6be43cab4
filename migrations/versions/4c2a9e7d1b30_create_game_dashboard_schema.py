"""create users, players, characters, items and scores

Revision ID: 4c2a9e7d1b30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2a9e7d1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'player',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('gold', sa.Integer(), nullable=False),
        sa.Column('health', sa.Integer(), nullable=False),
        sa.Column('max_health', sa.Integer(), nullable=False),
        sa.Column('mana', sa.Integer(), nullable=False),
        sa.Column('max_mana', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_played', sa.DateTime(timezone=True), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_player_user_id', 'player', ['user_id'])

    op.create_table(
        'character',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('character_class', sa.String(length=30), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('strength', sa.Integer(), nullable=False),
        sa.Column('intelligence', sa.Integer(), nullable=False),
        sa.Column('dexterity', sa.Integer(), nullable=False),
        sa.Column('vitality', sa.Integer(), nullable=False),
        sa.Column('health', sa.Integer(), nullable=False),
        sa.Column('max_health', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_character_player_id', 'character', ['player_id'])

    op.create_table(
        'item',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=200), nullable=False),
        sa.Column('item_type', sa.String(length=30), nullable=False),
        sa.Column('attack_bonus', sa.Integer(), nullable=False),
        sa.Column('defense_bonus', sa.Integer(), nullable=False),
        sa.Column('value', sa.Integer(), nullable=False),
        sa.Column('rarity', sa.Integer(), nullable=False),
        sa.Column('is_equipped', sa.Boolean(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('acquired_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('ix_item_player_id', 'item', ['player_id'])

    op.create_table(
        'score',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_mode', sa.String(length=50), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('kills', sa.Integer(), nullable=False),
        sa.Column('deaths', sa.Integer(), nullable=False),
        sa.Column('time_played', sa.Float(), nullable=False),
        sa.Column('difficulty_level', sa.Integer(), nullable=False),
        sa.Column('is_high_score', sa.Boolean(), nullable=False),
        sa.Column('achieved_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_score_player_mode', 'score', ['player_id', 'game_mode'])
    # At most one flagged high score per (player, game mode)
    op.create_index(
        'ix_score_one_high_per_mode', 'score', ['player_id', 'game_mode'],
        unique=True,
        sqlite_where=sa.text('is_high_score = 1'),
        postgresql_where=sa.text('is_high_score'),
    )


def downgrade():
    op.drop_index('ix_score_one_high_per_mode', table_name='score')
    op.drop_index('ix_score_player_mode', table_name='score')
    op.drop_table('score')
    op.drop_index('ix_item_player_id', table_name='item')
    op.drop_table('item')
    op.drop_index('ix_character_player_id', table_name='character')
    op.drop_table('character')
    op.drop_index('ix_player_user_id', table_name='player')
    op.drop_table('player')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
