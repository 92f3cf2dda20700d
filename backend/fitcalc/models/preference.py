from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from fitcalc.db.database import Base
from fitcalc.db.types import JSONB


class Preference(Base):
    __tablename__ = "preferences"

    key = Column(String(64), primary_key=True)
    value = Column(JSONB(), nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
