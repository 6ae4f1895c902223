from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from eco_electric.auth import check_admin, require_admin, require_owner_match, verify_token
from eco_electric.database import get_db
from eco_electric.repository import OrderRepository, UserRepository, is_admin
from eco_electric.schemas import EMAIL_PATTERN, OrderCreate, OrderReplace, PaymentIntentRequest
from eco_electric.stripe_service import PaymentGateway, get_payment_gateway
from eco_electric.tokens import Identity, TokenService, get_token_service

router = APIRouter()


# ---- Orders ----

@router.post("/orders", status_code=201)
def create_order(request: OrderCreate, db: Session = Depends(get_db)):
    order = OrderRepository(db).create(request.email, request.order)
    return order.to_dict()


@router.get("/orders")
def list_orders(
    email: Optional[str] = None,
    identity: Identity = Depends(verify_token),
    db: Session = Depends(get_db),
):
    orders = OrderRepository(db)
    if email is None:
        # no owner filter: the full listing is admin-only
        check_admin(db, identity)
        return [o.to_dict() for o in orders.list_all()]

    require_owner_match(identity, email)
    return [o.to_dict() for o in orders.list_by_owner(email)]


@router.get("/orders/{order_id}")
def get_order(order_id: str, db: Session = Depends(get_db)):
    return OrderRepository(db).get_by_id(order_id).to_dict()


@router.put("/orders/{order_id}")
def replace_order(order_id: str, request: OrderReplace, db: Session = Depends(get_db)):
    order = OrderRepository(db).replace(order_id, request.order, email=request.email)
    return order.to_dict()


@router.delete("/orders/{order_id}")
def delete_order(order_id: str, db: Session = Depends(get_db)):
    return {"deleted": OrderRepository(db).delete(order_id)}


# ---- Users ----

@router.get("/users")
def list_users(admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return [u.to_dict() for u in UserRepository(db).list_all()]


@router.put("/users/admin/{email}")
def make_admin(email: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return UserRepository(db).promote(email).to_dict()


@router.put("/users/{email}")
def upsert_user(
    email: str = Path(..., pattern=EMAIL_PATTERN),
    user: Dict[str, Any] = Body({}),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    record, created = UserRepository(db).upsert(email, user)
    return {
        "result": {"upserted": created, "user": record.to_dict()},
        "token": tokens.issue(email),
    }


@router.delete("/users/{user_id}")
def delete_user(user_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return {"deleted": UserRepository(db).delete(user_id)}


@router.get("/admin/{email}")
def check_admin_role(email: str, db: Session = Depends(get_db)):
    return {"admin": is_admin(db, email)}


# ---- Payments ----

@router.post("/create-payment-intent")
def create_payment_intent(
    request: PaymentIntentRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    return gateway.create_intent(request.price)
