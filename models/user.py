import uuid
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin

class User(Base, TimestampMixin):
    __tablename__ = "user"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Flipped only by a successful OTP verification or a verified OAuth sign-in
    email_verified = Column(Boolean, default=False, nullable=False)
    image = Column(String(512), nullable=True)

    accounts = relationship("Account", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    sessions = relationship("Session", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    todos = relationship("Todo", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
