"""
Depot Models.

Core models for warehouse inventory:
- Warehouse: Where stock is kept
- Item: Quantity-on-hand of a product at a warehouse
- Movement: Immutable log of completed transfers
- TransferRequest: Pending/approved/rejected transfer requests
"""

from depot.models.enums import MovementType, RequestStatus
from depot.models.item import Item
from depot.models.movement import Movement
from depot.models.request import TransferRequest
from depot.models.warehouse import Warehouse

__all__ = [
    'MovementType',
    'RequestStatus',
    'Warehouse',
    'Item',
    'Movement',
    'TransferRequest',
]
