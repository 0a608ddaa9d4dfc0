"""
Input builders shared by the test modules.
"""

from depot.inputs import RequestInput, TransferInput


def move(item, quantity, source, destination):
    """TransferInput for `quantity` of `item` from `source` to `destination`."""
    return TransferInput(
        item_id=item.pk,
        quantity=quantity,
        from_warehouse_id=source.pk,
        to_warehouse_id=destination.pk,
    )


def ask(user, item, quantity, source, destination):
    """RequestInput submitted by `user`."""
    return RequestInput(
        user_id=user.pk,
        item_id=item.pk,
        quantity=quantity,
        from_warehouse_id=source.pk,
        to_warehouse_id=destination.pk,
    )
