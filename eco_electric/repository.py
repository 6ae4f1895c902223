import logging
import re
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eco_electric.errors import InvalidInput, NotFound
from eco_electric.models import Order, User

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def is_valid_id(record_id: str) -> bool:
    return bool(record_id) and _ID_PATTERN.match(record_id) is not None


def find_role(db: Session, email: str) -> Optional[str]:
    user = db.query(User).filter_by(email=email).first()
    return user.role if user else None


def is_admin(db: Session, email: str) -> bool:
    return find_role(db, email) == ADMIN_ROLE


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, email: str, payload) -> Order:
        order = Order(email=email, order=payload)
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info("Created order %s for %s", order.id, email)
        return order

    def list_by_owner(self, email: str):
        return self.db.query(Order).filter_by(email=email).all()

    def list_all(self):
        return self.db.query(Order).all()

    def find(self, order_id: str) -> Optional[Order]:
        return self.db.get(Order, order_id) if is_valid_id(order_id) else None

    def get_by_id(self, order_id: str) -> Order:
        order = self.find(order_id)
        if order is None:
            raise NotFound("Order", order_id)
        return order

    def replace(self, order_id: str, payload, email: Optional[str] = None) -> Order:
        """Replace the order payload, creating the record under ``order_id`` if absent.

        Creating needs an owner ``email``; an existing record keeps its owner.
        """
        if not is_valid_id(order_id):
            raise NotFound("Order", order_id)

        order = self.find(order_id)
        if order is None:
            if not email:
                raise InvalidInput("email is required to create an order")
            order = Order(id=order_id, email=email, order=payload)
            self.db.add(order)
            try:
                self.db.commit()
            except IntegrityError:
                # a concurrent retry inserted the same id first
                self.db.rollback()
                order = self.find(order_id)
                order.order = payload
                self.db.commit()
            else:
                logger.info("Upserted new order %s for %s", order_id, email)
        else:
            order.order = payload
            self.db.commit()
        self.db.refresh(order)
        return order

    def delete(self, order_id: str) -> bool:
        order = self.find(order_id)
        if order is None:
            return False
        self.db.delete(order)
        self.db.commit()
        logger.info("Deleted order %s", order_id)
        return True


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter_by(email=email).first()

    def upsert(self, email: str, fields: dict):
        """Merge ``fields`` into the user's profile. Returns ``(user, created)``."""
        fields = {k: v for k, v in fields.items() if k not in ("role", "email", "_id")}
        user = self.get_by_email(email)
        created = user is None
        if created:
            user = User(email=email, profile=fields)
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                # same email signed in twice at once
                self.db.rollback()
                user = self.get_by_email(email)
                created = False
        if not created:
            user.profile = {**(user.profile or {}), **fields}
            self.db.commit()
        self.db.refresh(user)
        return user, created

    def promote(self, email: str) -> User:
        user = self.get_by_email(email)
        if user is None:
            raise NotFound("User", email)
        user.role = ADMIN_ROLE
        self.db.commit()
        self.db.refresh(user)
        logger.info("Promoted %s to admin", email)
        return user

    def list_all(self):
        return self.db.query(User).all()

    def delete(self, user_id: str) -> bool:
        user = self.db.get(User, user_id) if is_valid_id(user_id) else None
        if user is None:
            return False
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user %s", user_id)
        return True
