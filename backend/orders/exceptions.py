"""
Domain exceptions for order placement and fulfillment.

Every exception carries the HTTP status it maps to and a machine-readable
code; core_backend.exceptions renders them for the API.
"""


class OrderError(Exception):
    """Base exception for order-related errors."""

    status_code = 400
    code = "order_error"

    def __init__(self, message=None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self):
        return "Order request failed"

    def get_details(self):
        """Extra fields included in the error response body."""
        return {}


# --- Precondition errors: raised before anything is persisted ---


class PreconditionError(OrderError):
    pass


class OrderingClosed(PreconditionError):
    """Raised when an order is attempted outside the ordering window."""

    status_code = 403
    code = "ordering_closed"

    def __init__(self, reason=None, window=None):
        self.reason = reason
        self.window = window or {}
        super().__init__(reason or "Ordering window is closed")

    def get_details(self):
        return {"orderingWindow": self.window}


class InvalidMenuItems(PreconditionError):
    """Raised when requested menu items are missing or inactive."""

    code = "invalid_menu_items"

    def __init__(self, menu_item_ids, message=None):
        self.menu_item_ids = [str(pk) for pk in menu_item_ids]
        if message is None:
            message = "Some menu items are invalid or inactive"
        super().__init__(message)

    def get_details(self):
        return {"menuItemIds": self.menu_item_ids}


class InvalidVariationSelection(PreconditionError):
    """Raised when selections violate a menu item's variation groups."""

    code = "invalid_variation_selection"

    def __init__(self, menu_item, group_names, message=None):
        self.menu_item = menu_item
        self.group_names = list(group_names)
        if message is None:
            message = (
                f"Invalid variation selection for '{menu_item.name}': "
                f"{', '.join(self.group_names)}"
            )
        super().__init__(message)

    def get_details(self):
        return {"menuItemId": str(self.menu_item.pk), "groups": self.group_names}


# --- Conflict errors: user-actionable ---


class ConflictError(OrderError):
    status_code = 409


class GuestEmailAlreadyRegistered(ConflictError):
    """Raised when a guest checks out with an email that has an account."""

    code = "guest_email_registered"

    def __init__(self, email):
        self.email = email
        super().__init__(
            "An account with this email already exists. Please log in to place your order."
        )


class OrderNumberConflict(ConflictError):
    """Raised when a unique order number could not be allocated."""

    code = "order_number_conflict"

    def __init__(self, attempts):
        self.attempts = attempts
        super().__init__(
            f"Failed to allocate a unique order number after {attempts} attempts"
        )


# --- Dependency errors: external collaborator failed, nothing persisted ---


class DependencyError(OrderError):
    status_code = 502


class PaymentAuthorizationFailed(DependencyError):
    """Raised when the payment gateway rejects, errors or times out."""

    code = "payment_authorization_failed"

    def default_message(self):
        return "Payment authorization failed"


# --- State errors: no side effects ---


class StateError(OrderError):
    pass


class IllegalStatusTransition(StateError):
    code = "illegal_status_transition"

    def __init__(self, current, target, message=None):
        self.current = current
        self.target = target
        if message is None:
            message = f"Cannot change fulfillment status from {current} to {target}"
        super().__init__(message)


class OrderNotFound(StateError):
    status_code = 404
    code = "order_not_found"

    def default_message(self):
        return "Order not found"


class OrderItemNotFound(StateError):
    status_code = 404
    code = "order_item_not_found"

    def default_message(self):
        return "Order item not found"
