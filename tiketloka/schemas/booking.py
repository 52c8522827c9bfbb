from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from tiketloka.models.enums import BookingStatus, PaymentMethod, parse_status
from tiketloka.schemas.destination import Destination
from tiketloka.utils.addons import coerce_id, parse_addon_selection
from tiketloka.utils.amounts import to_optional_amount, to_quantity


def to_visit_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # "2025-12-20" or a full timestamp; only the calendar day matters
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class LineItemBase(BaseModel):
    destination: Destination = Field(default_factory=Destination)
    quantity: int = 0
    visit_date: Optional[date] = None
    selected_addon_ids: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("addons", "selected_addon_ids"),
    )
    # snapshot of the destination price taken when the order was placed
    unit_price: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("price_per_unit", "unit_price", "price"),
    )
    # authoritative subtotal written by the backend at order time
    persisted_subtotal: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("subtotal", "persisted_subtotal"),
    )

    model_config = {"from_attributes": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("destination", mode="before")
    @classmethod
    def _destination(cls, value):
        return Destination() if value is None else value

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, value):
        return to_quantity(value)

    @field_validator("visit_date", mode="before")
    @classmethod
    def _visit_date(cls, value):
        return to_visit_date(value)

    @field_validator("selected_addon_ids", mode="before")
    @classmethod
    def _selected_addon_ids(cls, value):
        return parse_addon_selection(value)

    @field_validator("unit_price", "persisted_subtotal", mode="before")
    @classmethod
    def _amounts(cls, value):
        return to_optional_amount(value)


class CartLineItem(LineItemBase):
    id: Optional[Union[int, str]] = None
    destination_id: Optional[Union[int, str]] = None

    @field_validator("id", "destination_id", mode="before")
    @classmethod
    def _ids(cls, value):
        return coerce_id(value)


class BookingDetail(LineItemBase):
    id: Optional[Union[int, str]] = None
    ticket_code: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return coerce_id(value)


class Booking(BaseModel):
    id: Optional[Union[int, str]] = None
    booking_code: str = ""
    details: List[BookingDetail] = Field(default_factory=list)
    # unknown backend labels are kept as plain strings
    status: Union[BookingStatus, str] = BookingStatus.PENDING
    grand_total: Optional[Decimal] = None
    payment_method: Optional[PaymentMethod] = None
    qr_string: Optional[str] = None
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return coerce_id(value)

    @field_validator("booking_code", mode="before")
    @classmethod
    def _booking_code(cls, value):
        return "" if value is None else str(value)

    @field_validator("details", mode="before")
    @classmethod
    def _details(cls, value):
        return value if isinstance(value, (list, tuple)) else []

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return parse_status(value)

    @field_validator("grand_total", mode="before")
    @classmethod
    def _grand_total(cls, value):
        return to_optional_amount(value)

    @field_validator("payment_method", mode="before")
    @classmethod
    def _payment_method(cls, value):
        if value is None:
            return None
        try:
            return PaymentMethod(value)
        except ValueError:
            return None
