import random
from typing import Iterable, List, Optional

from flask import current_app

from cardroom import db
from cardroom.models import Card, GameRoom, load_ids
from .decks import DEFAULT_PROMPTS, DEFAULT_RESPONSES


class Deck:
    """One reference deck plus the room column holding its dealt pool."""

    def __init__(self, name: str, pool_attr: str, default_texts):
        self.name = name
        self.pool_attr = pool_attr
        self.default_texts = list(default_texts)

    def dealt_ids(self, room: GameRoom) -> List[int]:
        return load_ids(getattr(room, self.pool_attr))

    def __repr__(self):
        return f"Deck({self.name!r})"


PROMPTS = Deck('prompt', 'dealt_prompt_ids', DEFAULT_PROMPTS)
RESPONSES = Deck('response', 'dealt_response_ids', DEFAULT_RESPONSES)


class CardStore:
    def __init__(self, repository, rng: Optional[random.Random] = None):
        self.repository = repository
        self.rng = rng or random.Random()

    def ensure_seeded(self, decks=(PROMPTS, RESPONSES)) -> int:
        """Insert the default texts for every empty deck. Returns rows added."""
        inserted = 0
        for deck in decks:
            if Card.query.filter_by(deck=deck.name).count() > 0:
                continue
            db.session.add_all(Card(deck=deck.name, text=text) for text in deck.default_texts)
            inserted += len(deck.default_texts)
            current_app.logger.info(f"[seed] deck={deck.name} inserted={len(deck.default_texts)}")
        if inserted:
            db.session.commit()
        return inserted

    def deck_ids(self, deck: Deck) -> List[int]:
        return [row.id for row in db.session.query(Card.id).filter(Card.deck == deck.name).order_by(Card.id)]

    def get_cards(self, ids: Iterable[int]) -> List[Card]:
        """Cards for ``ids`` in the given order; unknown ids are skipped."""
        ids = list(ids)
        if not ids:
            return []
        by_id = {c.id: c for c in Card.query.filter(Card.id.in_(ids)).all()}
        return [by_id[i] for i in ids if i in by_id]

    def draw(self, room: GameRoom, deck: Deck, count: int, exclude: Iterable[int] = ()) -> List[Card]:
        """Deal ``count`` distinct cards from ``deck`` for ``room``.

        Cards already in the room's dealt pool are skipped. When fewer than
        ``count`` undealt cards remain, whatever is left is taken, the pool
        is reset and the rest comes from the full deck. Ids in ``exclude``
        (e.g. the cards already in a hand) are never returned, even after a
        reset. Returns fewer cards only if the deck itself is too small.
        """
        if count <= 0:
            return []
        excluded = set(exclude)
        dealt = deck.dealt_ids(room)
        dealt_set = set(dealt)
        all_ids = [i for i in self.deck_ids(deck) if i not in excluded]
        undealt = [i for i in all_ids if i not in dealt_set]

        if len(undealt) >= count:
            drawn = self.rng.sample(undealt, count)
            pool = dealt + drawn
        else:
            current_app.logger.info(
                f"[deck-reset] room={room.id} deck={deck.name} undealt={len(undealt)} wanted={count}"
            )
            drawn = list(undealt)
            self.rng.shuffle(drawn)
            taken = set(drawn)
            refill = [i for i in all_ids if i not in taken]
            drawn += self.rng.sample(refill, min(count - len(drawn), len(refill)))
            pool = list(drawn)

        self.repository.update_room(room, **{deck.pool_attr: pool})
        return self.get_cards(drawn)

    def draw_one(self, room: GameRoom, deck: Deck) -> Optional[Card]:
        cards = self.draw(room, deck, 1)
        return cards[0] if cards else None
