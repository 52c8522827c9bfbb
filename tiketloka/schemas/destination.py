from decimal import Decimal
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from tiketloka.utils.addons import coerce_id
from tiketloka.utils.amounts import ZERO, to_amount


class AddOn(BaseModel):
    id: Optional[Union[int, str]] = None
    name: str = ""
    price: Decimal = ZERO

    model_config = {"from_attributes": True, "extra": "ignore", "frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return coerce_id(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return "" if value is None else str(value)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return to_amount(value)


class Destination(BaseModel):
    id: Optional[Union[int, str]] = None
    name: str = ""

    # Pricing fields
    base_price: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("price", "base_price")
    )
    addons: List[AddOn] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return coerce_id(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return "" if value is None else str(value)

    @field_validator("base_price", mode="before")
    @classmethod
    def _base_price(cls, value):
        return to_amount(value)

    @field_validator("addons", mode="before")
    @classmethod
    def _addons(cls, value):
        # stale snapshots come without the relation loaded
        if not isinstance(value, (list, tuple)):
            return []
        return [
            item for item in value
            if isinstance(item, (dict, AddOn)) or hasattr(item, "id")
        ]
