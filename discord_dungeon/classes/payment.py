from enum import Enum


class PaymentOutcome(Enum):
    EXACT = "exact"
    OVER = "over"
    UNDER = "under"

    @property
    def activates(self) -> bool:
        return self is not PaymentOutcome.UNDER


def reconcile(expected_gp: int, received_gp: int) -> PaymentOutcome:
    if received_gp < expected_gp:
        return PaymentOutcome.UNDER
    if received_gp > expected_gp:
        return PaymentOutcome.OVER
    return PaymentOutcome.EXACT
