# citygrid/models/counter.py
"""Named sequence counters (asset id allocation)."""

from sqlalchemy import Column, Integer, String
from citygrid.database import Base


class CounterRow(Base):
    __tablename__ = "counters"

    name = Column(String(64), primary_key=True)
    value = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<CounterRow {self.name}={self.value}>"
