import threading
from typing import Dict, Optional

from flask import current_app


class ConnectionRegistry:
    """Process-wide map of caller identity to its live Socket.IO sid.

    One channel per identity: registering again replaces the old sid.
    Entries are added on the ``auth`` message and dropped on disconnect.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_identity: Dict[str, str] = {}
        self._by_sid: Dict[str, str] = {}

    def register(self, identity: str, sid: str) -> None:
        with self._lock:
            previous = self._by_identity.get(identity)
            if previous and previous != sid:
                self._by_sid.pop(previous, None)
            stale_identity = self._by_sid.get(sid)
            if stale_identity and stale_identity != identity:
                self._by_identity.pop(stale_identity, None)
            self._by_identity[identity] = sid
            self._by_sid[sid] = identity

    def unregister(self, sid: str) -> Optional[str]:
        """Forget ``sid``. Returns the identity it belonged to, if any."""
        with self._lock:
            identity = self._by_sid.pop(sid, None)
            if identity and self._by_identity.get(identity) == sid:
                del self._by_identity[identity]
            return identity

    def channel_for(self, identity: str) -> Optional[str]:
        with self._lock:
            return self._by_identity.get(identity)

    def is_connected(self, identity: str) -> bool:
        return self.channel_for(identity) is not None

    def __len__(self):
        with self._lock:
            return len(self._by_identity)


class NotificationHub:
    def __init__(self, registry: ConnectionRegistry, repository, socketio, namespace: str = '/ws'):
        self.registry = registry
        self.repository = repository
        self.socketio = socketio
        self.namespace = namespace

    def broadcast_to_room(self, room_id: int, event: str, payload=None) -> int:
        """Push ``event`` to every connected member of the room.

        Fire and forget: members without a registered channel are skipped
        and a failed emit is logged, never raised. Returns the number of
        channels the event was handed to.
        """
        delivered = 0
        for identity in self.repository.member_identities(room_id):
            sid = self.registry.channel_for(identity)
            if not sid:
                continue
            try:
                self.socketio.emit(event, payload or {}, to=sid, namespace=self.namespace)
                delivered += 1
            except Exception as exc:
                current_app.logger.warning(f"[push-fail] room={room_id} event={event} user={identity}: {exc}")
        current_app.logger.info(f"[push] room={room_id} event={event} delivered={delivered}")
        return delivered
