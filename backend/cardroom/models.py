from cardroom import db
from flask_login import UserMixin
import json

ROOM_WAITING = 'waiting'
ROOM_PLAYING = 'playing'
ROOM_FINISHED = 'finished'


def load_ids(raw):
    try:
        return [int(i) for i in json.loads(raw)] if raw else []
    except (TypeError, ValueError):
        return []


class User(UserMixin, db.Model):
    """Identity profile supplied by the upstream identity provider."""
    __tablename__ = 'user'
    id = db.Column(db.String(64), primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=True)
    first_name = db.Column(db.String(64), nullable=True)
    last_name = db.Column(db.String(64), nullable=True)
    profile_image_url = db.Column(db.String(512), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'profile_image_url': self.profile_image_url,
        }


class Card(db.Model):
    __tablename__ = 'card'
    id = db.Column(db.Integer, primary_key=True)
    deck = db.Column(db.String(16), nullable=False, index=True)  # prompt, response
    text = db.Column(db.Text, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
        }


class GamePlayer(db.Model):
    __tablename__ = 'game_player'
    __table_args__ = (db.UniqueConstraint('room_id', 'user_id', name='uq_game_player_room_user'),)
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('game_room.id'), nullable=False, index=True)
    user_id = db.Column(db.String(64), db.ForeignKey('user.id'), nullable=False, index=True)
    join_order = db.Column(db.Integer, nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)
    hand = db.Column(db.Text, nullable=True)  # JSON-encoded list of response card ids
    is_connected = db.Column(db.Boolean, default=True, nullable=False)
    joined_at = db.Column(db.DateTime, server_default=db.func.now())
    user = db.relationship('User')

    @property
    def hand_ids(self):
        return load_ids(self.hand)

    def to_dict(self, include_hand=False):
        data = {
            'id': self.id,
            'room_id': self.room_id,
            'user_id': self.user_id,
            'join_order': self.join_order,
            'score': self.score or 0,
            'hand_size': len(self.hand_ids),
            'is_connected': self.is_connected,
            'user': self.user.to_dict() if self.user else None,
        }
        if include_hand:
            data['hand'] = self.hand_ids
        return data


class GameRoom(db.Model):
    __tablename__ = 'game_room'
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(6), unique=True, nullable=False, index=True)
    host_id = db.Column(db.String(64), db.ForeignKey('user.id'), nullable=False)
    max_players = db.Column(db.Integer, default=8, nullable=False)
    target_score = db.Column(db.Integer, default=7, nullable=False)
    current_round = db.Column(db.Integer, default=1, nullable=False)
    current_judge_index = db.Column(db.Integer, default=0, nullable=False)
    current_prompt_card_id = db.Column(db.Integer, db.ForeignKey('card.id'), nullable=True)
    # JSON-encoded lists of card ids dealt in the current shuffle cycle
    dealt_prompt_ids = db.Column(db.Text, nullable=True)
    dealt_response_ids = db.Column(db.Text, nullable=True)
    state = db.Column(db.String(16), default=ROOM_WAITING, nullable=False)  # waiting, playing, finished
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())
    current_prompt_card = db.relationship('Card')

    def to_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'host_id': self.host_id,
            'max_players': self.max_players,
            'target_score': self.target_score,
            'current_round': self.current_round,
            'current_judge_index': self.current_judge_index,
            'current_prompt_card_id': self.current_prompt_card_id,
            'state': self.state,
        }


class RoundSubmission(db.Model):
    __tablename__ = 'round_submission'
    __table_args__ = (
        db.UniqueConstraint('room_id', 'round', 'player_id', name='uq_round_submission_player'),
    )
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('game_room.id'), nullable=False, index=True)
    round = db.Column(db.Integer, nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('game_player.id'), nullable=False)
    card_id = db.Column(db.Integer, db.ForeignKey('card.id'), nullable=False)
    is_winner = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    player = db.relationship('GamePlayer')
    card = db.relationship('Card')

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'round': self.round,
            'player_id': self.player_id,
            'card_id': self.card_id,
            'is_winner': self.is_winner,
            'player': self.player.to_dict() if self.player else None,
            'card': self.card.to_dict() if self.card else None,
        }
