"""
Domain errors raised by the ledger and the CRUD services.
Each carries the HTTP status and the message shown to the client.
"""


class LedgerError(Exception):
    status_code = 500
    code = "LEDGER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LedgerError):
    status_code = 404
    code = "NOT_FOUND"


class UnauthorizedError(LedgerError):
    status_code = 403
    code = "UNAUTHORIZED"


class InsufficientFundsError(LedgerError):
    status_code = 409
    code = "INSUFFICIENT_FUNDS"


class ExpiredError(LedgerError):
    status_code = 409
    code = "EXPIRED"


class InvalidAmountError(LedgerError):
    status_code = 400
    code = "INVALID_AMOUNT"


class BalanceLimitError(LedgerError):
    status_code = 409
    code = "BALANCE_LIMIT"
