# salon_booking/seed.py

from typing import List

from sqlmodel import Session, select

from salon_booking.logger import logger
from salon_booking.models import Service

# name: (price, duration minutes, description)
DEFAULT_SERVICES = {
    "Hair Cut": (100, 30, "Professional hair cutting service"),
    "Hair Wash": (50, 15, "Hair washing with premium shampoo"),
    "Shave": (80, 20, "Clean shave with quality products"),
    "Beard Trim": (60, 15, "Professional beard trimming"),
    "Hair Color": (300, 60, "Hair coloring service"),
    "Face Massage": (120, 25, "Relaxing face massage"),
    "Hair Styling": (150, 45, "Professional hair styling"),
    "Mustache Trim": (40, 10, "Mustache trimming service"),
}


def seed_default_services(session: Session) -> List[Service]:
    """Insert any default service that is missing by name. Returns the new rows."""
    existing = set(session.exec(select(Service.name)).all())

    created = []
    for name, (price, duration, description) in DEFAULT_SERVICES.items():
        if name in existing:
            continue
        service = Service(name=name, price=price, duration=duration, description=description)
        session.add(service)
        created.append(service)

    if created:
        session.commit()
        for service in created:
            session.refresh(service)
        logger.info(f"Seeded {len(created)} default services")
    return created
