"""Booking routes."""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from booking_manager.bookings.service import (
    BookingCreate,
    EventTypeNotFoundError,
    InvalidBookingTimeError,
    SlotUnavailableError,
    create_booking,
)
from booking_manager.core.database import get_session
from booking_manager.models import Booking

router = APIRouter(prefix="/bookings", tags=["bookings"])


class AttendeeRead(SQLModel):
    id: int
    email: str
    name: str
    linkedin_url: str | None = None
    outreach_email: str | None = None


class BookingRead(SQLModel):
    id: int
    event_type_id: int
    title: str
    start_time: datetime
    end_time: datetime
    attendees: list[AttendeeRead] = []


@router.post("", response_model=BookingRead, status_code=201)
async def book(data: BookingCreate, session: Session = Depends(get_session)):
    """
    Create a booking.

    The booker's email is reconciled with earlier attendees that share the
    LinkedIn profile given in the form responses. Returns 404 for an unknown
    event type, 400 for an invalid time range and 409 if a host is busy.
    """
    try:
        booking = create_booking(session, data)
    except EventTypeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidBookingTimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return BookingRead.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(booking_id: int, session: Session = Depends(get_session)):
    """Return a booking with its attendees."""
    booking = session.get(Booking, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    return BookingRead.model_validate(booking)
