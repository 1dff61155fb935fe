from enum import Enum

from waypoint.services.widget.router import ActionTable

PAGE = "payment"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    WALLET = "wallet"


class PaymentPage:
    def __init__(self, total: float, method: PaymentMethod = PaymentMethod.CREDIT_CARD):
        self.total = total
        self.method = method

    def switch_method(self, method: PaymentMethod) -> None:
        self.method = method

    def action_table(self) -> ActionTable:
        return ActionTable(PAGE, {
            "upi_offer": lambda: self.switch_method(PaymentMethod.WALLET),
            "wallet_offer": lambda: self.switch_method(PaymentMethod.WALLET),
            "card_offer": lambda: self.switch_method(PaymentMethod.CREDIT_CARD),
        })
