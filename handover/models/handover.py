"""ORM model for handover documents."""

from sqlalchemy import Column, DateTime, String, Text, func

from handover.models.base import Base


class Handover(Base):
    """Opaque JSON document stored whole under an identifier. data holds serialized JSON."""

    __tablename__ = "handovers"

    id = Column(String(255), primary_key=True)
    data = Column(Text, nullable=False)
    last_updated = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
