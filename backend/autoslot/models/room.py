import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from autoslot.db.base import Base


class RoomType(str, Enum):
    regular = "regular"
    lab = "lab"
    computer_lab = "computer_lab"
    physical_education = "physical_education"
    library = "library"


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    type: Mapped[RoomType] = mapped_column(
        SAEnum(RoomType, name="room_type"), nullable=False, default=RoomType.regular
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=40)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
