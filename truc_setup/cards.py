from enum import IntEnum
from typing import List, Optional
import random

SUITS = ["Oros", "Copas", "Espadas", "Bastos"]

VALUES = [1, 2, 3, 4, 5, 6, 7, 10, 11, 12]

SOTA = 10
CABALLO = 11
REY = 12


def next_value(value: int) -> Optional[int]:
    if value not in VALUES:
        raise ValueError(f"Invalid Truc card value: {value}")
    idx = VALUES.index(value)
    if idx == len(VALUES) - 1:
        return None
    return VALUES[idx + 1]


class Card:

    __slots__ = ['value', 'suit']

    def __init__(self, value: int, suit: str):
        if suit not in SUITS:
            raise ValueError(f"Unrecognized suit: {suit}")
        if value not in VALUES:
            raise ValueError(f"Invalid Truc card value: {value}")
        self.value = value
        self.suit = suit

    def __str__(self) -> str:
        return f"{self.value} de {self.suit}"

    def __repr__(self) -> str:
        return f"Card(value={self.value}, suit='{self.suit}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.value == other.value and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.value, self.suit))


def is_perico(card: Card, marker: Card) -> bool:
    if card.suit != marker.suit:
        return False
    if marker.value == CABALLO:
        return card.value == REY
    return card.value == CABALLO


def is_perica(card: Card, marker: Card) -> bool:
    if card.suit != marker.suit:
        return False
    if marker.value == SOTA:
        return card.value == REY
    return card.value == SOTA


class TrucValue(IntEnum):
    CUATRO = 1
    CINCO = 2
    SEIS = 3
    SIETE_BOBO = 4
    SOTA = 5
    CABALLO = 6
    REY = 7
    AS_BOBO = 8
    DOS = 9
    TRES = 10
    SIETE_OROS = 11
    SIETE_ESPADAS = 12
    AS_BASTOS = 13
    AS_ESPADAS = 14
    PERICA = 15
    PERICO = 16


TRUC_VALUE_OVERRIDES = {
    (1, "Espadas"): TrucValue.AS_ESPADAS,
    (1, "Bastos"): TrucValue.AS_BASTOS,
    (7, "Espadas"): TrucValue.SIETE_ESPADAS,
    (7, "Oros"): TrucValue.SIETE_OROS,
}


def get_truc_value(card: Card, marker: Card) -> TrucValue:
    # Promoted cards beat everything, the named aces and sevens beat the rest
    if is_perico(card, marker):
        return TrucValue.PERICO
    if is_perica(card, marker):
        return TrucValue.PERICA

    if (card.value, card.suit) in TRUC_VALUE_OVERRIDES:
        return TRUC_VALUE_OVERRIDES[(card.value, card.suit)]

    if card.value == 3:
        return TrucValue.TRES
    elif card.value == 2:
        return TrucValue.DOS
    elif card.value == 1:
        # Must be Oros/Copas
        return TrucValue.AS_BOBO
    elif card.value == REY:
        return TrucValue.REY
    elif card.value == CABALLO:
        return TrucValue.CABALLO
    elif card.value == SOTA:
        return TrucValue.SOTA
    elif card.value == 7:
        # Must be Copas/Bastos
        return TrucValue.SIETE_BOBO
    elif card.value == 6:
        return TrucValue.SEIS
    elif card.value == 5:
        return TrucValue.CINCO
    elif card.value == 4:
        return TrucValue.CUATRO

    raise ValueError(f"Unexpected card value/suit: ({card.value}, {card.suit})")


class Deck:

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)
        self.cards: List[Card] = []
        self.reset()

    def _build_deck(self) -> List[Card]:
        return [Card(val, suit) for suit in SUITS for val in VALUES]

    def shuffle(self) -> None:
        self._random.shuffle(self.cards)

    def draw(self, n: int = 1) -> List[Card]:
        if n > len(self.cards):
            raise ValueError(f"Cannot draw {n} cards; only {len(self.cards)} remain.")
        drawn = self.cards[:n]
        self.cards = self.cards[n:]
        return drawn

    def reset(self) -> None:
        self._random = random.Random(self.seed)
        self.cards = self._build_deck()
        self.shuffle()

    def count(self) -> int:
        return len(self.cards)
