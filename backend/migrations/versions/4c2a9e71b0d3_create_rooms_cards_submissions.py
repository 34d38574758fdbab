"""create user, card, game_room, game_player and round_submission

Revision ID: 4c2a9e71b0d3
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2a9e71b0d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=True, unique=True),
        sa.Column('first_name', sa.String(length=64), nullable=True),
        sa.Column('last_name', sa.String(length=64), nullable=True),
        sa.Column('profile_image_url', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'card',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('deck', sa.String(length=16), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
    )
    op.create_index('ix_card_deck', 'card', ['deck'])
    op.create_table(
        'game_room',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(length=6), nullable=False),
        sa.Column('host_id', sa.String(length=64), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('max_players', sa.Integer(), nullable=False),
        sa.Column('target_score', sa.Integer(), nullable=False),
        sa.Column('current_round', sa.Integer(), nullable=False),
        sa.Column('current_judge_index', sa.Integer(), nullable=False),
        sa.Column('current_prompt_card_id', sa.Integer(), sa.ForeignKey('card.id'), nullable=True),
        sa.Column('dealt_prompt_ids', sa.Text(), nullable=True),
        sa.Column('dealt_response_ids', sa.Text(), nullable=True),
        sa.Column('state', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_game_room_code', 'game_room', ['code'], unique=True)
    op.create_table(
        'game_player',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('game_room.id'), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('join_order', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('hand', sa.Text(), nullable=True),
        sa.Column('is_connected', sa.Boolean(), nullable=False),
        sa.Column('joined_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('room_id', 'user_id', name='uq_game_player_room_user'),
    )
    op.create_index('ix_game_player_room_id', 'game_player', ['room_id'])
    op.create_index('ix_game_player_user_id', 'game_player', ['user_id'])
    op.create_table(
        'round_submission',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('game_room.id'), nullable=False),
        sa.Column('round', sa.Integer(), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('game_player.id'), nullable=False),
        sa.Column('card_id', sa.Integer(), sa.ForeignKey('card.id'), nullable=False),
        sa.Column('is_winner', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('room_id', 'round', 'player_id', name='uq_round_submission_player'),
    )
    op.create_index('ix_round_submission_room_id', 'round_submission', ['room_id'])


def downgrade():
    op.drop_index('ix_round_submission_room_id', table_name='round_submission')
    op.drop_table('round_submission')
    op.drop_index('ix_game_player_user_id', table_name='game_player')
    op.drop_index('ix_game_player_room_id', table_name='game_player')
    op.drop_table('game_player')
    op.drop_index('ix_game_room_code', table_name='game_room')
    op.drop_table('game_room')
    op.drop_index('ix_card_deck', table_name='card')
    op.drop_table('card')
    op.drop_table('user')
