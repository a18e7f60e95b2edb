"""Consumable domain entity: a FOOD or DRINK item with price, measure and expiry date."""
from datetime import date
from enum import Enum
from typing import Optional, Union

from consumables.domain.exceptions import BadTypeError


class ConsumableType(str, Enum):
    FOOD = "FOOD"
    DRINK = "DRINK"


# What ``measure`` means for each type
MEASURE_LABELS = {
    ConsumableType.FOOD: "weight",
    ConsumableType.DRINK: "volume",
}


class Consumable:
    def __init__(self, type: ConsumableType, id: int, name: str, notes: str,
                 price: float, expiry_date: date, measure: float):
        self.type = type
        self.id = id
        self.name = name
        self.notes = notes
        self.price = price
        self.expiry_date = expiry_date
        self.measure = measure

    @staticmethod
    def build(type: Union[ConsumableType, str], id: int, name: str, notes: str,
              price: float, expiry_date: date, measure: float) -> "Consumable":
        '''Creates a FOOD or DRINK item. Raises BadTypeError for any other type.'''
        if isinstance(type, ConsumableType):
            item_type = type
        elif isinstance(type, str) and type in ConsumableType.__members__:
            item_type = ConsumableType[type]
        else:
            raise BadTypeError(f"Unknown consumable type: {type!r}")
        return Consumable(item_type, id, name, notes, price, expiry_date, measure)

    @property
    def measure_label(self) -> str:
        return MEASURE_LABELS[self.type]

    def days_until_expiry(self, today: Optional[date] = None) -> int:
        '''Whole days from today until the expiry date (negative once expired).'''
        return (self.expiry_date - (today or date.today())).days

    def __lt__(self, other: "Consumable") -> bool:
        return self.expiry_date < other.expiry_date

    def __str__(self) -> str:
        return (f"#{self.id} {self.type.value} {self.name} - ${self.price:.2f} - "
                f"{self.measure_label} {self.measure} - Exp: {self.expiry_date.isoformat()}")

    __repr__ = __str__

    def to_dict(self):
        '''Converts the Consumable to a dictionary for JSON responses and persistence.'''
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "notes": self.notes,
            "price": self.price,
            "measure": self.measure,
            "expiryDate": self.expiry_date.isoformat(),
        }
