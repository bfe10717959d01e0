"""Example record model"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from ..database import Base


class ExampleRecord(Base):
    """Record whose insert/update trigger reports the current settings"""

    __tablename__ = "example_records"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    remote_connection_id = Column(Integer, ForeignKey("connections.id"))
    results = Column(Text)  # Rich text written by the trigger
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<ExampleRecord {self.id} - {self.name}>"
