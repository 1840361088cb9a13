from sqlalchemy import Column, String, Text

from wedding_api.database import Base


class KVEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(String, nullable=False)
