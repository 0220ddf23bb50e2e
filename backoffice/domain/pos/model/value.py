from enum import StrEnum


class PaymentMethod(StrEnum):
    CASH = "cash"
    CARD = "card"
    DIGITAL = "digital"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"


class TransactionStatus(StrEnum):
    BUILDING = "building"
    AWAITING_PAYMENT = "awaiting_payment"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
