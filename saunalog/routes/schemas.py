"""Request bodies for the JSON API.

Values are typed loosely on purpose: the ledger's validators decide what is
rejected, dropped or normalized to absent.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DayMetaRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    facility_name: Any = Field(default=None, alias="facilityName")
    condition_rating: Any = Field(default=None, alias="conditionRating")
    satisfaction_rating: Any = Field(default=None, alias="satisfactionRating")

    def supplied(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class AppendSessionRequest(BaseModel):
    minutes: Any = None
    meta: Optional[DayMetaRequest] = None


class ReplaceSessionsRequest(BaseModel):
    sessions: List[Any] = Field(default_factory=list)
