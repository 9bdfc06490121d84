"""
Ledger error taxonomy.

Every error carries a stable `code` and the HTTP status the JSON API answers
with. Input errors are also ValueErrors, like the other validation failures.
"""


class LedgerError(Exception):
    code = "LedgerError"
    status_code = 400


class Unauthorized(LedgerError):
    code = "Unauthorized"
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidDate(LedgerError, ValueError):
    code = "InvalidDate"


class InvalidInput(LedgerError, ValueError):
    code = "InvalidInput"


class InvalidIndex(LedgerError, ValueError):
    code = "InvalidIndex"
