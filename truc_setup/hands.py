from collections import defaultdict
from typing import List, Optional, Sequence, Tuple

from truc_setup.cards import Card, CABALLO, SOTA, next_value, is_perico, is_perica


class Hand:
    """Classified hand built from a seat's face-up cards.

    Subclasses implement ``from_cards`` returning ``None`` when the cards do
    not form the hand, and ``_key`` giving the value used for ordering.
    """

    def __init__(self, cards: Sequence[Card]):
        self.cards: List[Card] = list(cards)

    @classmethod
    def from_cards(cls, cards: Sequence[Card], marker: Card) -> Optional["Hand"]:
        raise NotImplementedError

    def _key(self) -> Tuple:
        raise NotImplementedError

    def score(self) -> int:
        raise NotImplementedError

    def __lt__(self, other) -> bool:
        return self._key() < other._key()

    def __gt__(self, other) -> bool:
        return self._key() > other._key()

    def __le__(self, other) -> bool:
        return self._key() <= other._key()

    def __ge__(self, other) -> bool:
        return self._key() >= other._key()

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        cards = ", ".join(str(c) for c in self.cards)
        return f"{type(self).__name__}([{cards}])"


class Flor(Hand):

    def __init__(self, cards: Sequence[Card], marker: Card):
        super().__init__(cards)
        self.marker = marker

    @staticmethod
    def is_flor(cards: Sequence[Card], marker: Card) -> bool:
        if len(cards) != 3:
            return False
        # Perico and Perica match any suit
        suits = {c.suit for c in cards if not is_perico(c, marker) and not is_perica(c, marker)}
        return len(suits) <= 1

    @classmethod
    def from_cards(cls, cards: Sequence[Card], marker: Card) -> Optional["Flor"]:
        if cls.is_flor(cards, marker):
            return cls(cards, marker)
        return None

    def _card_points(self, card: Card) -> int:
        if card.value <= 7:
            return card.value
        if card.value == SOTA and is_perica(card, self.marker):
            return 7
        if card.value == CABALLO and is_perico(card, self.marker):
            return 8
        return 0

    def value(self) -> int:
        # Flor is counted from 20
        return 20 + sum(self._card_points(c) for c in self.cards)

    def score(self) -> int:
        return self.value()

    def _key(self) -> Tuple:
        return (self.value(),)


class Secansa(Hand):

    @staticmethod
    def sorted_secansa_cards(cards: Sequence[Card]) -> Optional[List[Card]]:
        ordered = sorted(cards, key=lambda c: c.value)

        run: List[Card] = []
        for card, next_card in zip(ordered, ordered[1:]):
            if next_value(card.value) == next_card.value:
                for c in (card, next_card):
                    if not run or run[-1] != c:
                        run.append(c)

        if len(run) >= 2:
            return run
        return None

    @classmethod
    def from_cards(cls, cards: Sequence[Card], marker: Card = None) -> Optional["Secansa"]:
        run = cls.sorted_secansa_cards(cards)
        if run is None:
            return None
        return cls(run)

    def is_secansa_3_cards(self) -> bool:
        return len(self.cards) == 3

    def highest_card(self) -> Card:
        return self.cards[-1]

    def score(self) -> int:
        return 3 if self.is_secansa_3_cards() else 1

    def _key(self) -> Tuple:
        return (self.is_secansa_3_cards(), self.highest_card().value)


class Ali(Hand):

    @classmethod
    def from_cards(cls, cards: Sequence[Card], marker: Card = None) -> Optional["Ali"]:
        groups = defaultdict(list)
        for c in sorted(cards, key=lambda c: c.value):
            groups[c.value].append(c)

        best = None
        for group in groups.values():
            if len(group) < 2:
                continue
            if best is None or len(group) > len(best):
                best = group

        if best is None:
            return None
        return cls(best)

    def is_ali_3_cards(self) -> bool:
        return len(self.cards) == 3

    def is_ali_aces(self) -> bool:
        return all(c.value == 1 for c in self.cards)

    def score(self) -> int:
        if self.is_ali_3_cards() and self.is_ali_aces():
            return 6
        if self.is_ali_3_cards() or self.is_ali_aces():
            return 3
        return 1

    def _key(self) -> Tuple:
        # Aces rank above every other value in Ali
        value = self.cards[0].value
        return (self.is_ali_3_cards(), value == 1, value)


HAND_TYPES = {
    "flor": Flor,
    "secansa": Secansa,
    "ali": Ali,
}
