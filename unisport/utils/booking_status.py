from typing import Dict, FrozenSet

from unisport.exceptions import InvalidRequestError
from unisport.models.booking import BookingStatus, PaymentStatus


BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.COMPLETED}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    ),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

PAYMENT_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.UNPAID: frozenset({PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.REFUNDED: frozenset(),
}


def is_terminal(status: BookingStatus) -> bool:
    return not BOOKING_TRANSITIONS[status]


def validate_booking_transition(
    current: BookingStatus, target: BookingStatus
) -> None:
    """Raises InvalidRequestError unless current -> target is allowed."""
    if current == target:
        return
    if target not in BOOKING_TRANSITIONS[current]:
        raise InvalidRequestError(
            f"Cannot change booking status from {current.value} to {target.value}"
        )


def validate_payment_transition(
    current: PaymentStatus, target: PaymentStatus
) -> None:
    if current == target:
        return
    if target not in PAYMENT_TRANSITIONS[current]:
        raise InvalidRequestError(
            f"Cannot change payment status from {current.value} to {target.value}"
        )
