import threading
import time
from typing import Callable, Dict, Tuple

from flask import current_app, has_app_context


class RoundScheduler:
    """Deferred per-room actions, one pending action per room.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set, in
      which case the worker runs inline
    - A second request for the same (room, round) is skipped
    - ``cancel`` drops whatever is pending for a room; a cancelled or
      superseded worker wakes up and returns without calling back
    """

    def __init__(self, app, socketio):
        self.app = app
        self.socketio = socketio
        self._lock = threading.Lock()
        self._pending: Dict[int, Tuple[int, float]] = {}

    def schedule(self, room_id: int, round_number: int, delay: float, callback: Callable, *args) -> bool:
        app = self.app
        if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            return False

        with self._lock:
            pending = self._pending.get(room_id)
            if pending and pending[0] == round_number:
                app.logger.info(f"[timer-skip] room={room_id} round={round_number} already scheduled")
                return False
            token = (round_number, time.monotonic())
            self._pending[room_id] = token

        app.logger.info(f"[timer-set] room={room_id} round={round_number} delay={delay}s")

        def _worker(rid: int, expected: Tuple[int, float], wait: float):
            if wait > 0:
                self.socketio.sleep(wait)
            with self._lock:
                if self._pending.get(rid) != expected:
                    app.logger.info(f"[timer-abort] room={rid} round={expected[0]} cancelled")
                    return
                del self._pending[rid]
            app.logger.info(f"[timer-fire] room={rid} round={expected[0]}")
            # Inline runs (tests) already sit inside this app's context
            if has_app_context() and current_app._get_current_object() is app:
                callback(*args)
                return
            with app.app_context():
                callback(*args)

        if app.config.get('TESTING'):
            _worker(room_id, token, delay)
        else:
            self.socketio.start_background_task(_worker, room_id, token, delay)
        return True

    def cancel(self, room_id: int) -> bool:
        with self._lock:
            dropped = self._pending.pop(room_id, None)
        if dropped:
            self.app.logger.info(f"[timer-cancel] room={room_id} round={dropped[0]}")
        return dropped is not None

    def is_pending(self, room_id: int) -> bool:
        with self._lock:
            return room_id in self._pending
