import random
import string
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from cardroom.models import Card, ROOM_FINISHED, ROOM_PLAYING, ROOM_WAITING
from .cards import PROMPTS, RESPONSES
from .errors import ErrorCode, Result
from .repository import GameState

CODE_ALPHABET = string.ascii_uppercase + string.digits


class GameEngine:
    """Room lifecycle and round state machine.

    Every public operation validates before it writes and reports rule
    violations through a ``Result`` instead of raising. Reads always go
    back to the repository; nothing here caches a GameState between
    calls. Concurrent requests against one room are not serialized:
    submission and join uniqueness are backed by database constraints,
    the "all cards submitted" notification is a best-effort hint.
    """

    def __init__(
        self,
        repository,
        cards,
        hub,
        scheduler,
        hand_size: int = 7,
        max_players: int = 8,
        min_players: int = 3,
        default_target_score: int = 7,
        code_length: int = 6,
        next_round_delay: float = 6.0,
    ):
        self.repository = repository
        self.cards = cards
        self.hub = hub
        self.scheduler = scheduler
        self.hand_size = hand_size
        self.max_players = max_players
        self.min_players = min_players
        self.default_target_score = default_target_score
        self.code_length = code_length
        self.next_round_delay = next_round_delay

    # ---- rooms ----

    def generate_room_code(self) -> str:
        """Draw random codes until one is not taken."""
        while True:
            code = ''.join(random.choices(CODE_ALPHABET, k=self.code_length))
            if not self.repository.get_room_by_code(code):
                return code

    def create_room(self, host_id: str, target_score: Optional[int] = None) -> Result:
        self.cards.ensure_seeded()
        code = self.generate_room_code()
        room = self.repository.create_room(
            code=code,
            host_id=host_id,
            max_players=self.max_players,
            target_score=target_score or self.default_target_score,
            current_round=1,
            current_judge_index=0,
            state=ROOM_WAITING,
        )
        self.repository.add_player(room.id, host_id, join_order=0, hand=[])
        self.deal_hand(room.id, host_id)
        current_app.logger.info(f"[create] room={room.id} code={code} host={host_id} target={room.target_score}")
        return Result.ok(code=code, room_id=room.id)

    def join_room(self, code: str, user_id: str) -> Result:
        room = self.repository.get_room_by_code((code or '').strip().upper())
        if not room:
            return Result.fail(ErrorCode.NOT_FOUND, 'Room not found')
        if room.state != ROOM_WAITING:
            return Result.fail(ErrorCode.GAME_IN_PROGRESS)

        players = self.repository.list_players(room.id)
        max_players = room.max_players or self.max_players
        if len(players) >= max_players:
            return Result.fail(ErrorCode.ROOM_FULL, f'Room is full (maximum {max_players} players)')
        if any(p.user_id == user_id for p in players):
            return Result.fail(ErrorCode.ALREADY_JOINED)

        try:
            self.repository.add_player(room.id, user_id, join_order=len(players), hand=[])
        except IntegrityError:
            # Lost a race with a concurrent join by the same identity
            self.repository.rollback()
            return Result.fail(ErrorCode.ALREADY_JOINED)
        self.deal_hand(room.id, user_id)
        current_app.logger.info(f"[join] room={room.id} user={user_id} order={len(players)}")

        self.hub.broadcast_to_room(room.id, 'player_joined', {'user_id': user_id})
        return Result.ok(room_id=room.id)

    def start_game(self, room_id: int, user_id: str) -> Result:
        room = self.repository.get_room(room_id)
        if not room:
            return Result.fail(ErrorCode.NOT_FOUND, 'Room not found')
        if room.host_id != user_id:
            return Result.fail(ErrorCode.UNAUTHORIZED, 'Only the host can start the game')
        if room.state != ROOM_WAITING:
            return Result.fail(ErrorCode.GAME_IN_PROGRESS)

        players = self.repository.list_players(room_id)
        if len(players) < self.min_players:
            return Result.fail(
                ErrorCode.NOT_ENOUGH_PLAYERS,
                f'Need at least {self.min_players} players to start the game',
            )
        max_players = room.max_players or self.max_players
        if len(players) > max_players:
            return Result.fail(ErrorCode.TOO_MANY_PLAYERS, f'Too many players (maximum {max_players} players)')

        self.cards.ensure_seeded()
        prompt = self.cards.draw_one(room, PROMPTS)
        self.repository.update_room(
            room,
            state=ROOM_PLAYING,
            current_round=1,
            current_judge_index=0,
            current_prompt_card_id=prompt.id if prompt else None,
        )
        current_app.logger.info(f"[start] room={room_id} players={len(players)} prompt={room.current_prompt_card_id}")

        self.hub.broadcast_to_room(room_id, 'game_started', {
            'prompt_card': _card_dict(prompt),
            'round': 1,
            'judge_index': 0,
        })
        return Result.ok()

    # ---- hands ----

    def deal_hand(self, room_id: int, user_id: str) -> List[Card]:
        """Top the player's hand up to the hand size. Returns the new cards."""
        player = self.repository.get_player(room_id, user_id)
        if not player:
            return []
        hand = player.hand_ids
        needed = self.hand_size - len(hand)
        if needed <= 0:
            return []
        room = self.repository.get_room(room_id)
        new_cards = self.cards.draw(room, RESPONSES, needed, exclude=hand)
        self.repository.update_player(player, hand=hand + [c.id for c in new_cards])
        return new_cards

    def get_hand(self, room_id: int, user_id: str) -> List[Card]:
        player = self.repository.get_player(room_id, user_id)
        if not player:
            return []
        return self.cards.get_cards(player.hand_ids)

    def get_state(self, room_id: int) -> Optional[GameState]:
        return self.repository.get_game_state(room_id)

    # ---- rounds ----

    def submit_card(self, room_id: int, user_id: str, card_id: int) -> Result:
        state = self.repository.get_game_state(room_id)
        if not state:
            return Result.fail(ErrorCode.NOT_FOUND, 'Room not found')
        room = state.room
        if room.state != ROOM_PLAYING:
            return Result.fail(ErrorCode.NOT_PLAYING)

        player = state.player_for(user_id)
        if not player:
            return Result.fail(ErrorCode.NOT_A_MEMBER)
        if state.judge and state.judge.id == player.id:
            return Result.fail(ErrorCode.JUDGE_CANNOT_SUBMIT)
        if any(s.player_id == player.id for s in state.submissions):
            return Result.fail(ErrorCode.ALREADY_SUBMITTED)
        hand = player.hand_ids
        if card_id not in hand:
            return Result.fail(ErrorCode.CARD_NOT_IN_HAND)

        round_number = room.current_round or 1
        try:
            submission = self.repository.add_submission(room.id, round_number, player.id, card_id)
        except IntegrityError:
            self.repository.rollback()
            return Result.fail(ErrorCode.ALREADY_SUBMITTED)

        hand.remove(card_id)
        self.repository.update_player(player, hand=hand)
        self.deal_hand(room.id, user_id)

        submitted = len(self.repository.list_submissions(room.id, round_number))
        expected = len(state.players) - 1
        current_app.logger.info(f"[submit] room={room.id} round={round_number} user={user_id} {submitted}/{expected}")
        if submitted >= expected:
            self.hub.broadcast_to_room(room.id, 'all_cards_submitted', {'round': round_number})
        else:
            self.hub.broadcast_to_room(room.id, 'card_submitted', {'user_id': user_id, 'round': round_number})
        return Result.ok(submission_id=submission.id)

    def judge_card(self, room_id: int, user_id: str, submission_id: int) -> Result:
        state = self.repository.get_game_state(room_id)
        if not state:
            return Result.fail(ErrorCode.NOT_FOUND, 'Room not found')
        room = state.room
        if room.state != ROOM_PLAYING:
            return Result.fail(ErrorCode.NOT_PLAYING)
        if not state.judge or state.judge.user_id != user_id:
            return Result.fail(ErrorCode.UNAUTHORIZED, 'Only the judge can select winners')
        submission = next((s for s in state.submissions if s.id == submission_id), None)
        if not submission:
            return Result.fail(ErrorCode.NOT_FOUND, 'Submission not found')

        round_number = room.current_round or 1
        winner = submission.player
        self.repository.mark_winner(submission)
        new_score = (winner.score or 0) + 1
        self.repository.update_player(winner, score=new_score)
        winner_data = winner.to_dict()
        current_app.logger.info(f"[judge] room={room.id} round={round_number} winner={winner.user_id} score={new_score}")

        self.hub.broadcast_to_room(room.id, 'round_winner', {
            'winner': winner_data,
            'winning_card': _card_dict(submission.card),
            'round': round_number,
        })

        if new_score >= (room.target_score or self.default_target_score):
            self._finish_game(room, winner_data)
            return Result.ok(winner_id=winner.id, finished=True)

        self.scheduler.schedule(
            room.id,
            round_number,
            self.next_round_delay,
            self._advance_if_current,
            room.id,
            round_number,
            winner.id,
        )
        return Result.ok(winner_id=winner.id, finished=False)

    def advance_round(self, room_id: int, winning_player_id: Optional[int] = None) -> Result:
        state = self.repository.get_game_state(room_id)
        if not state:
            return Result.fail(ErrorCode.NOT_FOUND, 'Room not found')
        room = state.room
        if room.state != ROOM_PLAYING:
            return Result.fail(ErrorCode.NOT_PLAYING)
        member_count = len(state.players)
        if not member_count:
            return Result.fail(ErrorCode.NOT_ENOUGH_PLAYERS)

        next_round = (room.current_round or 1) + 1
        next_judge = state.index_of(winning_player_id) if winning_player_id is not None else -1
        if next_judge < 0:
            next_judge = ((room.current_judge_index or 0) + 1) % member_count

        prompt = self.cards.draw_one(room, PROMPTS)
        self.repository.update_room(
            room,
            current_round=next_round,
            current_judge_index=next_judge,
            current_prompt_card_id=prompt.id if prompt else room.current_prompt_card_id,
        )
        current_app.logger.info(f"[next_round] room={room_id} round={next_round} judge_index={next_judge}")

        self.hub.broadcast_to_room(room_id, 'next_round', {
            'round': next_round,
            'judge_index': next_judge,
            'prompt_card': _card_dict(prompt),
        })
        return Result.ok(round=next_round, judge_index=next_judge)

    def _advance_if_current(self, room_id: int, expected_round: int, winning_player_id: int) -> Optional[Result]:
        # Timer callback: the room may have moved on or been finished meanwhile
        room = self.repository.get_room(room_id)
        if not room or room.state != ROOM_PLAYING or room.current_round != expected_round:
            current_app.logger.info(f"[advance-abort] room={room_id} expected_round={expected_round}")
            return None
        return self.advance_round(room_id, winning_player_id)

    def _finish_game(self, room, winner_data) -> None:
        self.repository.update_room(room, state=ROOM_FINISHED)
        self.scheduler.cancel(room.id)
        current_app.logger.info(f"[finish] room={room.id} winner={winner_data['user_id']}")
        self.hub.broadcast_to_room(room.id, 'game_finished', {'winner': winner_data})


def _card_dict(card):
    return card.to_dict() if card else None
