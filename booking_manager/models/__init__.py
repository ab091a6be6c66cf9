from booking_manager.models.attendee import Attendee
from booking_manager.models.booking import Booking
from booking_manager.models.event_type import EventType
from booking_manager.models.host import Host

__all__ = ["Attendee", "Booking", "EventType", "Host"]
