"""Remote connection model"""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from ..database import Base


class Connection(Base):
    """Named endpoint of a remote vault"""

    __tablename__ = "connections"

    id = Column(Integer, primary_key=True, index=True)
    api_name = Column(String(100), unique=True, nullable=False, index=True)
    base_url = Column(Text, nullable=False)  # e.g. "https://other.veevavault.com"
    auth_token = Column(Text)  # Sent as a bearer token when set
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Connection {self.api_name}>"
