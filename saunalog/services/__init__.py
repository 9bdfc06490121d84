from saunalog.services.ledger import SessionLedger
from saunalog.services.users import save_user
from saunalog.services.validators import (
    parse_date_key,
    normalize_minutes,
    clean_minutes_list,
    normalize_rating,
    normalize_facility_name,
    normalize_meta,
    parse_index,
)

__all__ = [
    'SessionLedger',
    'save_user',
    'parse_date_key',
    'normalize_minutes',
    'clean_minutes_list',
    'normalize_rating',
    'normalize_facility_name',
    'normalize_meta',
    'parse_index',
]
