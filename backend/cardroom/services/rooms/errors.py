from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    NOT_FOUND = 'not_found'
    GAME_IN_PROGRESS = 'game_in_progress'
    ROOM_FULL = 'room_full'
    ALREADY_JOINED = 'already_joined'
    UNAUTHORIZED = 'unauthorized'
    NOT_ENOUGH_PLAYERS = 'not_enough_players'
    TOO_MANY_PLAYERS = 'too_many_players'
    NOT_PLAYING = 'not_playing'
    NOT_A_MEMBER = 'not_a_member'
    JUDGE_CANNOT_SUBMIT = 'judge_cannot_submit'
    ALREADY_SUBMITTED = 'already_submitted'
    CARD_NOT_IN_HAND = 'card_not_in_hand'


DEFAULT_MESSAGES = {
    ErrorCode.NOT_FOUND: 'Not found',
    ErrorCode.GAME_IN_PROGRESS: 'Game already in progress',
    ErrorCode.ROOM_FULL: 'Room is full',
    ErrorCode.ALREADY_JOINED: 'You are already in this room',
    ErrorCode.UNAUTHORIZED: 'Unauthorized',
    ErrorCode.NOT_ENOUGH_PLAYERS: 'Not enough players to start the game',
    ErrorCode.TOO_MANY_PLAYERS: 'Too many players',
    ErrorCode.NOT_PLAYING: 'Game not in progress',
    ErrorCode.NOT_A_MEMBER: 'Player not in room',
    ErrorCode.JUDGE_CANNOT_SUBMIT: 'Judge cannot submit cards',
    ErrorCode.ALREADY_SUBMITTED: 'Card already submitted',
    ErrorCode.CARD_NOT_IN_HAND: 'Card not in hand',
}

# HTTP status used by the request layer for each failure
HTTP_STATUS = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.NOT_A_MEMBER: 403,
    ErrorCode.GAME_IN_PROGRESS: 409,
    ErrorCode.ROOM_FULL: 409,
    ErrorCode.ALREADY_JOINED: 409,
    ErrorCode.ALREADY_SUBMITTED: 409,
}


@dataclass
class Result:
    """Outcome of an engine operation: a success flag plus a reason."""
    success: bool
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, **data):
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: ErrorCode, message: Optional[str] = None):
        return cls(success=False, error_code=code, message=message or DEFAULT_MESSAGES[code])

    @property
    def http_status(self) -> int:
        if self.success:
            return 200
        return HTTP_STATUS.get(self.error_code, 400)

    def to_dict(self):
        if self.success:
            return {'success': True, **self.data}
        return {
            'success': False,
            'error': self.message,
            'error_code': self.error_code.value,
        }
