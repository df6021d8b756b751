"""
Key/value user preferences.
"""

from sqlalchemy import Column, Text

from domain.models.database import Base


class Preference(Base):
    """Stored preference value, kept as text"""

    __tablename__ = "preferences"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
