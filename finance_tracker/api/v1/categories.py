"""/v1/categories - CRUD for the caller's categories"""

import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import CategoryCreate, CategoryResponse, CategoryUpdate, MessageResponse
from finance_tracker.api.dependencies import get_current_user_id, parse_uuid
from finance_tracker.infrastructure.database.models import Category
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import CategoryRepository

router = APIRouter()


def to_category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        user_id=str(category.user_id),
        name=category.name,
        type=category.type,
        color=category.color,
        icon=category.icon,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def _get_owned(repo: CategoryRepository, category_id: str, user_id: uuid.UUID) -> Category:
    category = repo.get_for_user(parse_uuid(category_id, "category"), user_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(user_id: uuid.UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return [to_category_response(c) for c in CategoryRepository(db).list_by_user(user_id)]


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    body: CategoryCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    category = CategoryRepository(db).create(user_id, **body.model_dump())
    db.commit()
    db.refresh(category)
    return to_category_response(category)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, user_id: uuid.UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return to_category_response(_get_owned(CategoryRepository(db), category_id, user_id))


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    body: CategoryUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = CategoryRepository(db)
    category = _get_owned(repo, category_id, user_id)

    # name and type cannot be cleared
    changes = {
        key: value
        for key, value in body.model_dump(exclude_unset=True).items()
        if value is not None or key in ("color", "icon")
    }
    repo.update(category, **changes)
    db.commit()
    db.refresh(category)
    return to_category_response(category)


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(category_id: str, user_id: uuid.UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """
    Delete a category.

    Transactions that reference it are kept and show up under
    "Uncategorized" in monthly reports.
    """
    repo = CategoryRepository(db)
    repo.delete(_get_owned(repo, category_id, user_id))
    db.commit()
    return MessageResponse(message="Category deleted successfully")
