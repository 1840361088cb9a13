from sqlalchemy import Column, String, Integer, LargeBinary

from wedding_api.database import Base


class BlobObject(Base):
    __tablename__ = "blobs"

    key = Column(String, primary_key=True)
    data = Column(LargeBinary, nullable=False)
    content_type = Column(String, nullable=True)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(String, nullable=False)
