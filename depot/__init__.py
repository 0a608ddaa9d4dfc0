"""
Django Depot: warehouse inventory with transfers and transfer requests.

Usage:
    from depot import inventory, StockError

    inventory.transfer({
        "item_id": item.pk, "quantity": 10,
        "from_warehouse_id": main.pk, "to_warehouse_id": annex.pk,
    })
    request = inventory.submit(RequestInput(
        user_id=user.pk, item_id=item.pk, quantity=5,
        from_warehouse_id=main.pk, to_warehouse_id=annex.pk,
    ))
    inventory.approve(request.pk)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from depot.service import get_inventory
        return get_inventory()
    elif name == 'Depot':
        from depot.service import Depot
        return Depot
    elif name == 'StockError':
        from depot.exceptions import StockError
        return StockError
    elif name == 'Warehouse':
        from depot.models.warehouse import Warehouse
        return Warehouse
    elif name == 'Item':
        from depot.models.item import Item
        return Item
    elif name == 'Movement':
        from depot.models.movement import Movement
        return Movement
    elif name == 'TransferRequest':
        from depot.models.request import TransferRequest
        return TransferRequest
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'Depot',
    'StockError',
    'Warehouse',
    'Item',
    'Movement',
    'TransferRequest',
]

__version__ = '0.1.0'
