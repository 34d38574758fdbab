"""Room domain services: repository, card dealing, notifications, timers
and the game engine that ties them together.

HTTP routes and socket handlers import from here, keeping transport
concerns separated from core game mechanics.
"""

from .cards import CardStore, Deck, PROMPTS, RESPONSES
from .engine import GameEngine
from .errors import ErrorCode, Result
from .notifications import ConnectionRegistry, NotificationHub
from .repository import GameState, RoomRepository
from .scheduler import RoundScheduler


def build_services(app, socketio):
    """Construct the service graph for ``app`` and park it on app.extensions."""
    cfg = app.config
    repository = RoomRepository()
    cards = CardStore(repository)
    registry = ConnectionRegistry()
    hub = NotificationHub(registry, repository, socketio)
    scheduler = RoundScheduler(app, socketio)
    engine = GameEngine(
        repository,
        cards,
        hub,
        scheduler,
        hand_size=int(cfg.get('HAND_SIZE', 7)),
        max_players=int(cfg.get('MAX_PLAYERS', 8)),
        min_players=int(cfg.get('MIN_PLAYERS', 3)),
        default_target_score=int(cfg.get('DEFAULT_TARGET_SCORE', 7)),
        code_length=int(cfg.get('ROOM_CODE_LENGTH', 6)),
        next_round_delay=float(cfg.get('NEXT_ROUND_DELAY_SEC', 6)),
    )
    app.extensions['room_repository'] = repository
    app.extensions['card_store'] = cards
    app.extensions['connection_registry'] = registry
    app.extensions['notification_hub'] = hub
    app.extensions['round_scheduler'] = scheduler
    app.extensions['game_engine'] = engine
    return engine


__all__ = [
    'CardStore',
    'ConnectionRegistry',
    'Deck',
    'ErrorCode',
    'GameEngine',
    'GameState',
    'NotificationHub',
    'PROMPTS',
    'RESPONSES',
    'Result',
    'RoomRepository',
    'RoundScheduler',
    'build_services',
]
