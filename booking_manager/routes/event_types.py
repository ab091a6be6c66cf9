"""Event type and host routes."""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel, select

from booking_manager.core.database import get_session
from booking_manager.models import EventType, Host

router = APIRouter(prefix="/event-types", tags=["event-types"])


class EventTypeCreate(SQLModel):
    title: str
    slug: str
    length_minutes: int = 30


class HostCreate(SQLModel):
    email: str
    name: str = ""
    ignore_for_availability: bool = False


class HostUpdate(SQLModel):
    """Partial host update. Omitted fields are left alone; null is rejected."""
    name: str = ""
    ignore_for_availability: bool = False


def _get_event_type(session: Session, event_type_id: int) -> EventType:
    event_type = session.get(EventType, event_type_id)
    if not event_type:
        raise HTTPException(status_code=404, detail="Event type not found")
    return event_type


@router.post("", response_model=EventType, status_code=201)
async def create_event_type(data: EventTypeCreate, session: Session = Depends(get_session)):
    """Create an event type. Returns 409 if the slug is taken."""
    if session.exec(select(EventType).where(EventType.slug == data.slug)).first():
        raise HTTPException(status_code=409, detail=f"Slug '{data.slug}' already exists")

    event_type = EventType.model_validate(data)
    session.add(event_type)
    session.commit()
    session.refresh(event_type)
    return event_type


@router.get("/{event_type_id}", response_model=EventType)
async def get_event_type(event_type_id: int, session: Session = Depends(get_session)):
    return _get_event_type(session, event_type_id)


@router.get("/{event_type_id}/hosts", response_model=list[Host])
async def list_hosts(event_type_id: int, session: Session = Depends(get_session)):
    return _get_event_type(session, event_type_id).hosts


@router.post("/{event_type_id}/hosts", response_model=Host, status_code=201)
async def add_host(
    event_type_id: int, data: HostCreate, session: Session = Depends(get_session)
):
    """
    Add a host to an event type.

    Set ignore_for_availability to keep the host on invites without letting
    their calendar block slots.
    """
    event_type = _get_event_type(session, event_type_id)

    host = Host.model_validate(data, update={"event_type_id": event_type.id})
    session.add(host)
    session.commit()
    session.refresh(host)
    return host


@router.patch("/{event_type_id}/hosts/{host_id}", response_model=Host)
async def update_host(
    event_type_id: int,
    host_id: int,
    data: HostUpdate,
    session: Session = Depends(get_session),
):
    """Update a host. Only fields present in the request are changed."""
    host = session.get(Host, host_id)
    if not host or host.event_type_id != event_type_id:
        raise HTTPException(status_code=404, detail="Host not found")

    host.sqlmodel_update(data.model_dump(exclude_unset=True))
    session.add(host)
    session.commit()
    session.refresh(host)
    return host
