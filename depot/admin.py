"""
Depot Admin.

- Warehouse: list + edit
- Item: editable descriptive fields; quantity only set on creation
- Movement: read-only audit trail
- TransferRequest: read-only with "approve" / "reject" actions
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from depot.exceptions import StockError
from depot.models import Item, Movement, RequestStatus, TransferRequest, Warehouse

logger = logging.getLogger(__name__)


# =========================================================================
# WAREHOUSE ADMIN
# =========================================================================

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    """Warehouse admin — editable."""

    list_display = ['name', 'address']
    search_fields = ['name', 'address']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# ITEM ADMIN
# =========================================================================

@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Item admin. Stock only changes via transfers after creation."""

    list_display = ['name', 'warehouse', 'category', 'price', 'quantity']
    list_filter = ['warehouse', 'category']
    search_fields = ['name', 'category', 'description']

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ['created_at', 'updated_at']
        return ['quantity', 'created_at', 'updated_at']


# =========================================================================
# MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(Movement)
class MovementAdmin(admin.ModelAdmin):
    """Movement admin — read-only. Immutable audit trail."""

    list_display = ['timestamp', 'item', 'quantity', 'from_warehouse',
                    'to_warehouse', 'type', 'user']
    list_filter = ['type', 'from_warehouse', 'to_warehouse']
    search_fields = ['item__name']
    readonly_fields = ['item', 'quantity', 'timestamp', 'from_warehouse',
                       'to_warehouse', 'type', 'user', 'request']
    date_hierarchy = 'timestamp'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# TRANSFER REQUEST ADMIN (read-only with approve/reject actions)
# =========================================================================

@admin.register(TransferRequest)
class TransferRequestAdmin(admin.ModelAdmin):
    """TransferRequest admin — decisions go through RequestLifecycle."""

    list_display = ['id', 'item', 'quantity', 'from_warehouse', 'to_warehouse',
                    'user', 'status', 'timestamp']
    list_filter = ['status']
    search_fields = ['item__name']
    readonly_fields = ['user', 'item', 'quantity', 'from_warehouse', 'to_warehouse',
                       'timestamp', 'status', 'resolved_at']
    actions = ['approve_requests', 'reject_requests']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description=_('Approve selected requests'))
    def approve_requests(self, request, queryset):
        from depot import inventory

        count = 0
        for transfer_request in queryset.filter(status=RequestStatus.PENDING):
            try:
                inventory.approve(transfer_request.pk, user=request.user)
                count += 1
            except StockError as exc:
                logger.warning("approve_requests: request %s not approved: %s",
                               transfer_request.pk, exc)

        self.message_user(request, _('{count} request(s) approved.').format(count=count))

    @admin.action(description=_('Reject selected requests'))
    def reject_requests(self, request, queryset):
        from depot import inventory

        count = 0
        for transfer_request in queryset.filter(status=RequestStatus.PENDING):
            try:
                inventory.reject(transfer_request.pk)
                count += 1
            except StockError as exc:
                logger.warning("reject_requests: request %s not rejected: %s",
                               transfer_request.pk, exc)

        self.message_user(request, _('{count} request(s) rejected.').format(count=count))
