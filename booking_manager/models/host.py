"""Host model: the association between a person and an event type."""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from booking_manager.models.event_type import EventType


class Host(SQLModel, table=True):
    """A host of an event type.

    Attributes:
        id: Auto-incrementing identifier.
        event_type_id: Foreign key to the hosted EventType.
        email: Host's email, used to find their other bookings and to
            address invites.
        name: Display name.
        ignore_for_availability: If True, the host's busy time does not
            reduce bookable slots. They are still invited to every booking.
        event_type: Reference to the parent EventType.
    """
    id: int | None = Field(default=None, primary_key=True)
    event_type_id: int = Field(foreign_key="eventtype.id", index=True)
    email: str
    name: str = ""
    ignore_for_availability: bool = Field(default=False)

    # Relationship
    event_type: Optional["EventType"] = Relationship(back_populates="hosts")
