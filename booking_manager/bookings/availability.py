"""Host selection for availability checks and invites."""
from datetime import datetime

from sqlmodel import Session, select

from booking_manager.models import Attendee, Booking, EventType, Host


def hosts_for_availability(hosts: list[Host]) -> list[Host]:
    """Hosts whose busy time blocks a slot."""
    return [host for host in hosts if not host.ignore_for_availability]


def hosts_for_invites(hosts: list[Host]) -> list[Host]:
    """Hosts who receive the booking invite. Ignored hosts are still invited."""
    return list(hosts)


def find_busy_hosts(
    session: Session, hosts: list[Host], start_time: datetime, end_time: datetime
) -> list[Host]:
    """Return the hosts attending any booking that overlaps [start_time, end_time)."""
    if not hosts:
        return []

    statement = (
        select(Attendee.email)
        .join(Booking, Attendee.booking_id == Booking.id)
        .where(Booking.start_time < end_time)
        .where(Booking.end_time > start_time)
    )
    busy_emails = {email.lower() for email in session.exec(statement).all()}
    return [host for host in hosts if host.email.lower() in busy_emails]


def is_slot_available(
    session: Session, event_type: EventType, start_time: datetime, end_time: datetime
) -> bool:
    """Check that no availability-counting host is busy during the slot."""
    blocking = hosts_for_availability(event_type.hosts)
    return not find_busy_hosts(session, blocking, start_time, end_time)
