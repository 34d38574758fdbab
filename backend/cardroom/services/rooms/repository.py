import json
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from cardroom import db
from cardroom.models import Card, GamePlayer, GameRoom, RoundSubmission, User


@dataclass
class GameState:
    """Snapshot of a room assembled from fresh reads. Never cached."""
    room: GameRoom
    players: List[GamePlayer] = field(default_factory=list)
    prompt_card: Optional[Card] = None
    submissions: List[RoundSubmission] = field(default_factory=list)
    judge: Optional[GamePlayer] = None

    def player_for(self, user_id: str) -> Optional[GamePlayer]:
        return next((p for p in self.players if p.user_id == user_id), None)

    def index_of(self, player_id: int) -> int:
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                return idx
        return -1

    def to_dict(self):
        return {
            'room': self.room.to_dict(),
            'players': [p.to_dict() for p in self.players],
            'prompt_card': self.prompt_card.to_dict() if self.prompt_card else None,
            'submissions': [s.to_dict() for s in self.submissions],
            'judge': self.judge.to_dict() if self.judge else None,
        }


def _encode_ids(ids: Iterable[int]) -> str:
    return json.dumps([int(i) for i in ids])


class RoomRepository:
    """Plain CRUD over rooms, players, submissions and users.

    Every write commits immediately so that the next read, from this or
    any other request, sees it.
    """

    def rollback(self) -> None:
        db.session.rollback()

    # ---- users ----

    def get_user(self, user_id: str) -> Optional[User]:
        return db.session.get(User, user_id)

    def upsert_user(self, user_id: str, **profile) -> User:
        user = self.get_user(user_id)
        if user is None:
            user = User(id=user_id)
        for key, value in profile.items():
            if value is not None:
                setattr(user, key, value)
        if user not in db.session or profile:
            db.session.add(user)
            db.session.commit()
        return user

    # ---- rooms ----

    def get_room(self, room_id: int) -> Optional[GameRoom]:
        return db.session.get(GameRoom, room_id)

    def get_room_by_code(self, code: str) -> Optional[GameRoom]:
        return GameRoom.query.filter_by(code=code).first()

    def create_room(self, **fields) -> GameRoom:
        self.upsert_user(fields['host_id'])
        room = GameRoom(**fields)
        db.session.add(room)
        db.session.commit()
        return room

    def update_room(self, room: GameRoom, **updates) -> GameRoom:
        for key, value in updates.items():
            if key in ('dealt_prompt_ids', 'dealt_response_ids') and not isinstance(value, str):
                value = _encode_ids(value)
            setattr(room, key, value)
        db.session.add(room)
        db.session.commit()
        return room

    # ---- players ----

    def add_player(self, room_id: int, user_id: str, join_order: int, hand=None) -> GamePlayer:
        self.upsert_user(user_id)
        player = GamePlayer(
            room_id=room_id,
            user_id=user_id,
            join_order=join_order,
            score=0,
            hand=_encode_ids(hand or []),
        )
        db.session.add(player)
        db.session.commit()
        return player

    def get_player(self, room_id: int, user_id: str) -> Optional[GamePlayer]:
        return GamePlayer.query.filter_by(room_id=room_id, user_id=user_id).first()

    def update_player(self, player: GamePlayer, **updates) -> GamePlayer:
        for key, value in updates.items():
            if key == 'hand' and not isinstance(value, str):
                value = _encode_ids(value)
            setattr(player, key, value)
        db.session.add(player)
        db.session.commit()
        return player

    def remove_player(self, room_id: int, user_id: str) -> bool:
        deleted = GamePlayer.query.filter_by(room_id=room_id, user_id=user_id).delete()
        db.session.commit()
        return bool(deleted)

    def list_players(self, room_id: int) -> List[GamePlayer]:
        return (
            GamePlayer.query.filter_by(room_id=room_id)
            .order_by(GamePlayer.join_order, GamePlayer.id)
            .all()
        )

    def member_identities(self, room_id: int) -> List[str]:
        return [p.user_id for p in self.list_players(room_id)]

    def set_connected(self, user_id: str, connected: bool) -> int:
        updated = GamePlayer.query.filter_by(user_id=user_id).update(
            {'is_connected': connected}, synchronize_session=False
        )
        db.session.commit()
        return updated

    # ---- submissions ----

    def add_submission(self, room_id: int, round_number: int, player_id: int, card_id: int) -> RoundSubmission:
        submission = RoundSubmission(
            room_id=room_id,
            round=round_number,
            player_id=player_id,
            card_id=card_id,
        )
        db.session.add(submission)
        db.session.commit()
        return submission

    def get_submission(self, submission_id: int) -> Optional[RoundSubmission]:
        return db.session.get(RoundSubmission, submission_id)

    def list_submissions(self, room_id: int, round_number: int) -> List[RoundSubmission]:
        return (
            RoundSubmission.query.filter_by(room_id=room_id, round=round_number)
            .order_by(RoundSubmission.id)
            .all()
        )

    def mark_winner(self, submission: RoundSubmission) -> RoundSubmission:
        submission.is_winner = True
        db.session.add(submission)
        db.session.commit()
        return submission

    # ---- derived ----

    def get_game_state(self, room_id: int) -> Optional[GameState]:
        room = self.get_room(room_id)
        if not room:
            return None
        # Pick up writes committed by other requests since this session loaded the room
        db.session.refresh(room)
        players = self.list_players(room_id)
        prompt = db.session.get(Card, room.current_prompt_card_id) if room.current_prompt_card_id else None
        submissions = self.list_submissions(room_id, room.current_round or 1)
        idx = room.current_judge_index
        judge = players[idx] if idx is not None and 0 <= idx < len(players) else None
        return GameState(
            room=room,
            players=players,
            prompt_card=prompt,
            submissions=submissions,
            judge=judge,
        )
