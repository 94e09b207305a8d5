"""/v1/budgets - CRUD for the caller's monthly category budgets"""

import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import BudgetCreate, BudgetResponse, BudgetUpdate, MessageResponse
from finance_tracker.api.dependencies import get_current_user_id, parse_uuid
from finance_tracker.infrastructure.database.models import Budget
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import BudgetRepository, CategoryRepository
from finance_tracker.utils.money import from_cents, to_cents

router = APIRouter()


def to_budget_response(budget: Budget) -> BudgetResponse:
    return BudgetResponse(
        id=str(budget.id),
        user_id=str(budget.user_id),
        category_id=str(budget.category_id),
        month=budget.month,
        limit=from_cents(budget.limit_cents),
        spent=from_cents(budget.spent_cents),
        created_at=budget.created_at,
        updated_at=budget.updated_at,
    )


def _owned_category_id(db: Session, category_id: str, user_id: uuid.UUID) -> uuid.UUID:
    category = CategoryRepository(db).get_for_user(parse_uuid(category_id, "category"), user_id)
    if not category:
        raise HTTPException(status_code=400, detail="Unknown category")
    return category.id


def _get_owned(repo: BudgetRepository, budget_id: str, user_id: uuid.UUID) -> Budget:
    budget = repo.get_for_user(parse_uuid(budget_id, "budget"), user_id)
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.get("/budgets", response_model=List[BudgetResponse])
def list_budgets(user_id: uuid.UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return [to_budget_response(b) for b in BudgetRepository(db).list_by_user(user_id)]


@router.post("/budgets", response_model=BudgetResponse, status_code=201)
def create_budget(
    body: BudgetCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    budget = BudgetRepository(db).create(
        user_id,
        category_id=_owned_category_id(db, body.category_id, user_id),
        month=body.month,
        limit_cents=to_cents(body.limit),
        spent_cents=to_cents(body.spent),
    )
    db.commit()
    db.refresh(budget)
    return to_budget_response(budget)


@router.get("/budgets/{budget_id}", response_model=BudgetResponse)
def get_budget(budget_id: str, user_id: uuid.UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return to_budget_response(_get_owned(BudgetRepository(db), budget_id, user_id))


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    body: BudgetUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = BudgetRepository(db)
    budget = _get_owned(repo, budget_id, user_id)

    fields = {key: value for key, value in body.model_dump(exclude_unset=True).items() if value is not None}
    changes = {}
    if "category_id" in fields:
        changes["category_id"] = _owned_category_id(db, fields["category_id"], user_id)
    if "month" in fields:
        changes["month"] = fields["month"]
    if "limit" in fields:
        changes["limit_cents"] = to_cents(fields["limit"])
    if "spent" in fields:
        changes["spent_cents"] = to_cents(fields["spent"])

    repo.update(budget, **changes)
    db.commit()
    db.refresh(budget)
    return to_budget_response(budget)


@router.delete("/budgets/{budget_id}", response_model=MessageResponse)
def delete_budget(budget_id: str, user_id: uuid.UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    repo = BudgetRepository(db)
    repo.delete(_get_owned(repo, budget_id, user_id))
    db.commit()
    return MessageResponse(message="Budget deleted successfully")
