"""/v1/transactions - CRUD for the caller's ledger entries"""

import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import MessageResponse, TransactionCreate, TransactionResponse, TransactionUpdate
from finance_tracker.api.dependencies import get_current_user_id, parse_uuid
from finance_tracker.domain.exceptions import ValidationError
from finance_tracker.domain.months import parse_month_token
from finance_tracker.infrastructure.database.models import Transaction
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import CategoryRepository, TransactionRepository
from finance_tracker.utils.date_utils import as_utc
from finance_tracker.utils.money import from_cents, to_cents

router = APIRouter()


def to_transaction_response(transaction: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=str(transaction.id),
        user_id=str(transaction.user_id),
        category_id=str(transaction.category_id),
        amount=from_cents(transaction.amount_cents),
        type=transaction.type,
        occurred_at=as_utc(transaction.occurred_at),
        note=transaction.note,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )


def _owned_category_id(db: Session, category_id: str, user_id: uuid.UUID) -> uuid.UUID:
    """New transactions may only reference one of the caller's categories"""
    category = CategoryRepository(db).get_for_user(parse_uuid(category_id, "category"), user_id)
    if not category:
        raise HTTPException(status_code=400, detail="Unknown category")
    return category.id


def _get_owned(repo: TransactionRepository, transaction_id: str, user_id: uuid.UUID) -> Transaction:
    transaction = repo.get_for_user(parse_uuid(transaction_id, "transaction"), user_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(
    month: Optional[str] = Query(None, description="Only transactions in this YYYY-MM month"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    start = end = None
    if month is not None:
        try:
            month_range = parse_month_token(month)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        start, end = month_range.start, month_range.end

    records = TransactionRepository(db).list_by_user(user_id, start, end)
    return [to_transaction_response(t) for t in records]


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    body: TransactionCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    transaction = TransactionRepository(db).create(
        user_id,
        category_id=_owned_category_id(db, body.category_id, user_id),
        amount_cents=to_cents(body.amount),
        type=body.type,
        occurred_at=as_utc(body.occurred_at),
        note=body.note,
    )
    db.commit()
    db.refresh(transaction)
    return to_transaction_response(transaction)


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return to_transaction_response(_get_owned(TransactionRepository(db), transaction_id, user_id))


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    body: TransactionUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = TransactionRepository(db)
    transaction = _get_owned(repo, transaction_id, user_id)

    fields = body.model_dump(exclude_unset=True)
    changes = {}
    if fields.get("category_id") is not None:
        changes["category_id"] = _owned_category_id(db, fields["category_id"], user_id)
    if fields.get("amount") is not None:
        changes["amount_cents"] = to_cents(fields["amount"])
    if fields.get("type") is not None:
        changes["type"] = fields["type"]
    if fields.get("occurred_at") is not None:
        changes["occurred_at"] = as_utc(fields["occurred_at"])
    if "note" in fields:
        changes["note"] = fields["note"]

    repo.update(transaction, **changes)
    db.commit()
    db.refresh(transaction)
    return to_transaction_response(transaction)


@router.delete("/transactions/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = TransactionRepository(db)
    repo.delete(_get_owned(repo, transaction_id, user_id))
    db.commit()
    return MessageResponse(message="Transaction deleted successfully")
