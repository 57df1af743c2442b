import logging
import re
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.database import get_db
from app.models.trips import Trip, DEFAULT_TRIP_IMAGE
from app.schemas.common import MessageResponse
from app.schemas.trips import TripRequest, TripOut, TripListResponse, TripDetailResponse, TripSavedResponse
from app.core.dependencies import CurrentUser, get_current_user
from app.core.errors import InvalidId, MissingFields, NotFound, StoreFailure

router = APIRouter(dependencies=[Depends(get_current_user)])
logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def validate_trip_id(trip_id: str) -> str:
    if not UUID_PATTERN.match(trip_id):
        raise InvalidId("Trip ID must be a valid UUID")
    return trip_id.lower()


def validate_trip_fields(trip_data: TripRequest) -> None:
    if not trip_data.title or not trip_data.country or not trip_data.date_from or not trip_data.date_to:
        raise MissingFields("Title, country, dateFrom and dateTo are required")


def trip_values(trip_data: TripRequest) -> dict:
    """Column values for a create or a full replace"""
    return {
        "title": trip_data.title.strip(),
        "country": trip_data.country.strip(),
        "date_from": trip_data.date_from,
        "date_to": trip_data.date_to,
        "trip_type": trip_data.trip_type or [],
        "tags": trip_data.tags or [],
        "budget": trip_data.budget.strip() if trip_data.budget else None,
        "description": trip_data.description.strip() if trip_data.description else None,
        "image": trip_data.image or DEFAULT_TRIP_IMAGE,
    }


def get_owned_trip(db: Session, trip_id: str, owner_id: int) -> Trip:
    # Id and owner in one predicate: someone else's trip looks exactly like a missing one
    trip = db.query(Trip).filter(Trip.id == trip_id, Trip.user_id == owner_id).first()
    if not trip:
        raise NotFound("Trip not found")
    return trip


@router.get("", response_model=TripListResponse)
def get_trips(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Get all trips of the authenticated user, newest first"""
    try:
        trips = (
            db.query(Trip)
            .filter(Trip.user_id == current_user.id)
            .order_by(Trip.created_at.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching trips: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to fetch trips. Please try again later.")

    logger.info(f"Returning {len(trips)} trips for user {current_user.id}")
    return TripListResponse(
        data=[TripOut.model_validate(trip) for trip in trips],
        user=current_user.email,
        count=len(trips),
    )


@router.get("/{trip_id}", response_model=TripDetailResponse)
def get_trip(
    trip_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Get a single trip owned by the authenticated user"""
    trip_id = validate_trip_id(trip_id)
    try:
        trip = get_owned_trip(db, trip_id, current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching trip {trip_id}: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to fetch trip. Please try again later.")

    return TripDetailResponse(data=TripOut.model_validate(trip))


@router.post("", response_model=TripSavedResponse, status_code=status.HTTP_201_CREATED)
def create_trip(
    trip_data: TripRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Create a trip owned by the authenticated user"""
    validate_trip_fields(trip_data)
    try:
        db_trip = Trip(user_id=current_user.id, **trip_values(trip_data))
        db.add(db_trip)
        db.commit()
        db.refresh(db_trip)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error adding trip: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to add trip. Please try again later.")

    logger.info(f"Trip {db_trip.id} created by user {current_user.id}")
    return TripSavedResponse(
        message="Trip added successfully",
        trip_id=db_trip.id,
        user=current_user.email,
    )


@router.put("/{trip_id}", response_model=TripSavedResponse, response_model_exclude_none=True)
def update_trip(
    trip_id: str,
    trip_data: TripRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Replace every mutable field of a trip owned by the authenticated user"""
    trip_id = validate_trip_id(trip_id)
    validate_trip_fields(trip_data)
    try:
        db_trip = get_owned_trip(db, trip_id, current_user.id)
        for field, value in trip_values(trip_data).items():
            setattr(db_trip, field, value)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating trip {trip_id}: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to update trip. Please try again later.")

    logger.info(f"Trip {trip_id} updated by user {current_user.id}")
    return TripSavedResponse(message="Trip updated successfully", trip_id=trip_id)


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip(
    trip_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Delete a trip owned by the authenticated user"""
    trip_id = validate_trip_id(trip_id)
    try:
        db_trip = get_owned_trip(db, trip_id, current_user.id)
        db.delete(db_trip)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting trip {trip_id}: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to delete trip. Please try again later.")

    logger.info(f"Trip {trip_id} deleted by user {current_user.id}")
    return MessageResponse(message="Trip deleted successfully")
