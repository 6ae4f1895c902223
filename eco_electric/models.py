import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, JSON
from eco_electric.database import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    profile = Column(JSON, nullable=False, default=dict)  # fields from federated sign-in
    role = Column(String, nullable=True)                  # admin | NULL

    def to_dict(self):
        return {"_id": self.id, "email": self.email, "role": self.role, **(self.profile or {})}


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, index=True, nullable=False)   # owner
    order = Column(JSON, nullable=False)                  # opaque items/quantities payload
    created_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "_id": self.id,
            "email": self.email,
            "order": self.order,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Tool(Base):
    __tablename__ = "tools"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    image = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    minimum_quantity = Column(Integer, default=1)
    available_quantity = Column(Integer, default=0)

    def to_dict(self):
        return {
            "_id": self.id,
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "price": float(self.price),
            "minimumQuantity": self.minimum_quantity,
            "availableQuantity": self.available_quantity,
        }


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "rating": self.rating,
            "comment": self.comment,
        }


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    details = Column(JSON, nullable=False, default=dict)  # education, location, phone, linkedin...

    def to_dict(self):
        return {"_id": self.id, "email": self.email, **(self.details or {})}
