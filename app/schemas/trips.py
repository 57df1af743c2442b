import re
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from app.schemas.common import CamelModel, RequestModel

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TripRequest(RequestModel):
    """Body of POST /trips and PUT /trips/{id}. PUT replaces every field."""
    title: Optional[str] = Field(None, max_length=200)
    country: Optional[str] = Field(None, max_length=100)
    date_from: Optional[date] = Field(None, description="YYYY-MM-DD")
    date_to: Optional[date] = Field(None, description="YYYY-MM-DD")
    trip_type: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    budget: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def calendar_date_string(cls, value):
        # Only YYYY-MM-DD text; timestamps and datetimes are rejected
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value.strip()):
            raise ValueError("Dates must use the YYYY-MM-DD format")
        return value.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Summer in the Alps",
                "country": "Switzerland",
                "dateFrom": "2024-07-01",
                "dateTo": "2024-07-14",
                "tripType": ["hiking"],
                "tags": ["mountains", "lakes"],
                "budget": "2000 EUR",
                "description": "Two weeks of trails"
            }
        }


class TripOut(CamelModel):
    id: str
    title: str
    date_from: date
    date_to: date
    country: str
    trip_type: List[str] = []
    tags: List[str] = []
    budget: Optional[str] = None
    description: Optional[str] = None
    image: str
    created_at: datetime

    @field_validator("trip_type", "tags", mode="before")
    @classmethod
    def default_empty_list(cls, value):
        return value or []


class TripListResponse(CamelModel):
    success: bool = True
    data: List[TripOut]
    user: str
    count: int


class TripDetailResponse(CamelModel):
    success: bool = True
    data: TripOut


class TripSavedResponse(CamelModel):
    success: bool = True
    message: str
    trip_id: str
    user: Optional[str] = None
