"""
Typed inputs, validated once at the boundary.

Transport layers hand loosely-typed payloads (parsed JSON, form data) to
``from_payload``; services only ever see the resulting frozen models.

Usage:
    data = TransferInput.from_payload(request.json)
    inventory.transfer(data)
"""

from decimal import Decimal
from typing import Annotated, Any, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StringConstraints,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from depot.conf import get_depot_settings
from depot.exceptions import StockError


Quantity = Annotated[StrictInt, Field(gt=0)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Text = Annotated[str, StringConstraints(strip_whitespace=True, max_length=10_000)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]
Price = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2, allow_inf_nan=False)]

# Bound violations on these fields are INVALID_QUANTITY, not INVALID_INPUT
QUANTITY_FIELDS = {'quantity'}


def _to_stock_error(exc: ValidationError) -> StockError:
    error = exc.errors()[0]
    field = '.'.join(str(part) for part in error['loc'])
    if field in QUANTITY_FIELDS and error['type'] in ('greater_than', 'greater_than_equal'):
        return StockError('INVALID_QUANTITY', requested=error['input'])
    return StockError('INVALID_INPUT', field=field, reason=error['msg'])


class DepotInput(BaseModel):
    """Frozen input model; from_payload reports failures as StockError."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]):
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise _to_stock_error(exc) from None


class TransferInput(DepotInput):
    """Direct transfer between two warehouses."""

    item_id: StrictInt
    quantity: Quantity
    from_warehouse_id: StrictInt
    to_warehouse_id: StrictInt

    @field_validator('to_warehouse_id')
    @classmethod
    def _distinct_warehouses(cls, v: int, info: ValidationInfo) -> int:
        if v == info.data.get('from_warehouse_id') and not get_depot_settings().ALLOW_SAME_WAREHOUSE_TRANSFER:
            raise ValueError('source and destination are the same warehouse')
        return v


class RequestInput(TransferInput):
    """User-submitted transfer request."""

    user_id: StrictInt


class ItemInput(DepotInput):
    """Schema for creating an item, optionally with opening stock."""

    name: Name
    description: Text = ''
    price: Optional[Price] = None
    category: Category = ''
    quantity: Annotated[StrictInt, Field(ge=0)] = 0
    warehouse_id: Optional[StrictInt] = None


class ItemUpdateInput(DepotInput):
    """Schema for updating an item. Only supplied fields change; quantity never does."""

    name: Optional[Name] = None
    description: Optional[Text] = None
    price: Optional[Price] = None
    category: Optional[Category] = None
    warehouse_id: Optional[StrictInt] = None

    @field_validator('name', 'description', 'category')
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError('may be omitted but not null')
        return v


class WarehouseInput(DepotInput):

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    address: Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)] = ''
