from saunalog.models.user import User
from saunalog.models.sauna_day import SaunaDay
from saunalog.models.sauna_session import SaunaSession

__all__ = [
    "User",
    "SaunaDay",
    "SaunaSession",
]
