"""
Input validation schemas using Pydantic for consumable JSON objects.
"""
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from consumables.utilities.constants import DATE_FORMAT


class ConsumableInput(BaseModel):
    """Schema for one item object, as posted to /addItem or stored in the database file.

    Unknown keys (notably ``id``) are ignored.
    """
    model_config = ConfigDict(extra='ignore', allow_inf_nan=False)

    name: StrictStr
    type: StrictStr
    notes: StrictStr
    price: float = Field(..., ge=0)
    measure: float = Field(..., ge=0)
    expiryDate: date

    @field_validator('price', 'measure', mode='before')
    @classmethod
    def require_number(cls, v):
        """Accept JSON numbers only (no numeric strings, no booleans)."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError('must be a number')
        return v

    @field_validator('expiryDate', mode='before')
    @classmethod
    def parse_expiry_date(cls, v):
        """Parse YYYY-MM-DD strings into a date."""
        if not isinstance(v, str):
            raise ValueError('expiryDate must be a YYYY-MM-DD string')
        return datetime.strptime(v.strip(), DATE_FORMAT).date()

    @property
    def is_drink(self) -> bool:
        """Types other than DRINK (any case) are treated as FOOD."""
        return self.type.strip().upper() == 'DRINK'
