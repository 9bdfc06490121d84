from fastapi import Request

from saunalog.services.ledger import SessionLedger


def get_ledger(request: Request) -> SessionLedger:
    """Dependency returning the ledger built at startup."""
    return request.app.state.ledger
