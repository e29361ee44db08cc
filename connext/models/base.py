from sqlalchemy import Column, DateTime, Integer

from connext.core.utils import utcnow
from connext.db.database import Base


class BaseModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
