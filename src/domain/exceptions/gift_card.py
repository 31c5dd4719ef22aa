"""Gift card-related domain exceptions."""

from .base import DomainException


class GiftCardNotFoundException(DomainException):
    """Raised when a gift card cannot be found."""

    def __init__(self, gift_card_id: int):
        super().__init__(
            message=f"Gift card not found: {gift_card_id}",
            code="GIFT_CARD_NOT_FOUND",
        )
        self.gift_card_id = gift_card_id


class GiftCardAccessDeniedException(DomainException):
    """Raised when an account acts on a gift card it does not own."""

    def __init__(self, gift_card_id: int, account_id: int):
        super().__init__(
            message=(
                f"Forbidden: user {account_id} is not allowed to "
                f"modify gift card {gift_card_id}"
            ),
            code="GIFT_CARD_FORBIDDEN",
        )
        self.gift_card_id = gift_card_id
        self.account_id = account_id


class InvalidGiftCardStatusException(DomainException):
    """Raised when a status value outside the known set is supplied."""

    def __init__(self, status, message: str | None = None):
        super().__init__(
            message=message or f"Invalid gift card status: {status!r}",
            code="INVALID_GIFT_CARD_STATUS",
        )
        self.status = status


class GiftCardAlreadyResolvedException(DomainException):
    """Raised when a gift card that is no longer pending is resolved again."""

    def __init__(self, gift_card_id: int, current_status):
        super().__init__(
            message=(
                f"Gift card {gift_card_id} is already resolved "
                f"(status {int(current_status)})"
            ),
            code="GIFT_CARD_ALREADY_RESOLVED",
        )
        self.gift_card_id = gift_card_id
        self.current_status = current_status
