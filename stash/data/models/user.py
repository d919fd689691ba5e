from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON

from stash.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    roles = Column(JSON, nullable=False, default=lambda: ["customer"])
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
