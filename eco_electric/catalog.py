"""Tools, reviews and profiles: plain pass-throughs to the store."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from eco_electric.auth import require_admin
from eco_electric.database import get_db
from eco_electric.errors import NotFound
from eco_electric.models import Profile, Review, Tool
from eco_electric.repository import is_valid_id
from eco_electric.schemas import ReviewCreate, ToolCreate, ToolUpdate
from eco_electric.tokens import Identity

logger = logging.getLogger(__name__)

router = APIRouter()

# request field -> column
TOOL_FIELDS = {
    "name": "name",
    "description": "description",
    "image": "image",
    "price": "price",
    "minimumQuantity": "minimum_quantity",
    "availableQuantity": "available_quantity",
}


def get_tool_or_404(db: Session, tool_id: str) -> Tool:
    tool = db.get(Tool, tool_id) if is_valid_id(tool_id) else None
    if tool is None:
        raise NotFound("Tool", tool_id)
    return tool


@router.get("/tools")
def list_tools(db: Session = Depends(get_db)):
    return [t.to_dict() for t in db.query(Tool).all()]


@router.get("/tools/{tool_id}")
def get_tool(tool_id: str, db: Session = Depends(get_db)):
    return get_tool_or_404(db, tool_id).to_dict()


@router.post("/tools", status_code=201)
def create_tool(request: ToolCreate, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    tool = Tool(**{column: getattr(request, field) for field, column in TOOL_FIELDS.items()})
    db.add(tool)
    db.commit()
    db.refresh(tool)
    logger.info("%s added tool %s", admin.email, tool.id)
    return tool.to_dict()


@router.put("/tools/{tool_id}")
def update_tool(tool_id: str, request: ToolUpdate, db: Session = Depends(get_db)):
    # stock changes after checkout arrive here, separately from the order itself
    tool = get_tool_or_404(db, tool_id)
    for field, value in request.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(tool, TOOL_FIELDS[field], value)
    db.commit()
    db.refresh(tool)
    return tool.to_dict()


@router.delete("/tools/{tool_id}")
def delete_tool(tool_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    tool = db.get(Tool, tool_id) if is_valid_id(tool_id) else None
    if tool is None:
        return {"deleted": False}
    db.delete(tool)
    db.commit()
    logger.info("%s deleted tool %s", admin.email, tool_id)
    return {"deleted": True}


@router.get("/reviews")
def list_reviews(db: Session = Depends(get_db)):
    reviews = db.query(Review).order_by(Review.created_at.desc()).all()
    return [r.to_dict() for r in reviews]


@router.post("/reviews", status_code=201)
def create_review(request: ReviewCreate, db: Session = Depends(get_db)):
    review = Review(**request.model_dump())
    db.add(review)
    db.commit()
    db.refresh(review)
    return review.to_dict()


@router.get("/profiles/{email}")
def get_profile(email: str, db: Session = Depends(get_db)):
    profile = db.query(Profile).filter_by(email=email).first()
    if profile is None:
        raise NotFound("Profile", email)
    return profile.to_dict()


@router.put("/profiles/{email}")
def upsert_profile(email: str, details: Dict[str, Any] = Body({}), db: Session = Depends(get_db)):
    details = {k: v for k, v in details.items() if k not in ("email", "_id")}
    profile = db.query(Profile).filter_by(email=email).first()
    if profile is None:
        profile = Profile(email=email, details=details)
        db.add(profile)
    else:
        profile.details = {**(profile.details or {}), **details}
    db.commit()
    db.refresh(profile)
    return profile.to_dict()
