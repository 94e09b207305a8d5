"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_tracker.domain.exceptions import ValidationError
from finance_tracker.domain.months import parse_month_token

Kind = Literal["income", "expense"]


class CamelModel(BaseModel):
    """Accept and emit camelCase keys while keeping snake_case attributes"""

    model_config = ConfigDict(populate_by_name=True)


def _validate_month(value: str) -> str:
    try:
        return parse_month_token(value).label
    except ValidationError as e:
        raise ValueError(str(e)) from e


# Reports


class CategorySummarySchema(CamelModel):
    """Single category row in a monthly report"""

    category_id: str = Field(..., alias="categoryId")
    name: str
    type: Optional[str] = None
    color: Optional[str] = None
    total: float
    count: int


class MonthlyReportResponse(BaseModel):
    """Response for GET /v1/reports/monthly"""

    month: str
    total_income: float
    total_expenses: float
    total_unclassified: float
    categories: List[CategorySummarySchema]


# Categories


class CategoryCreate(BaseModel):
    """Request body for POST /v1/categories"""

    name: str = Field(..., min_length=1, max_length=100)
    type: Kind
    color: Optional[str] = Field(None, max_length=50)
    icon: Optional[str] = Field(None, max_length=50)


class CategoryUpdate(BaseModel):
    """Request body for PUT /v1/categories/{id}; omitted fields are kept"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[Kind] = None
    color: Optional[str] = Field(None, max_length=50)
    icon: Optional[str] = Field(None, max_length=50)


class CategoryResponse(CamelModel):
    id: str
    user_id: str = Field(..., alias="userId")
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


# Transactions


class TransactionCreate(CamelModel):
    """Request body for POST /v1/transactions"""

    category_id: str = Field(..., alias="categoryId")
    amount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    type: Kind
    occurred_at: datetime = Field(..., alias="date")
    note: Optional[str] = Field(None, max_length=500)


class TransactionUpdate(CamelModel):
    """Request body for PUT /v1/transactions/{id}; omitted fields are kept"""

    category_id: Optional[str] = Field(None, alias="categoryId")
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    type: Optional[Kind] = None
    occurred_at: Optional[datetime] = Field(None, alias="date")
    note: Optional[str] = Field(None, max_length=500)


class TransactionResponse(CamelModel):
    id: str
    user_id: str = Field(..., alias="userId")
    category_id: str = Field(..., alias="categoryId")
    amount: float
    type: str
    occurred_at: datetime = Field(..., alias="date")
    note: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


# Budgets


class BudgetCreate(CamelModel):
    """Request body for POST /v1/budgets"""

    category_id: str = Field(..., alias="categoryId")
    month: str
    limit: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    spent: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)

    @field_validator("month")
    @classmethod
    def normalise_month(cls, value: str) -> str:
        return _validate_month(value)


class BudgetUpdate(CamelModel):
    """Request body for PUT /v1/budgets/{id}; omitted fields are kept"""

    category_id: Optional[str] = Field(None, alias="categoryId")
    month: Optional[str] = None
    limit: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    spent: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)

    @field_validator("month")
    @classmethod
    def normalise_month(cls, value: Optional[str]) -> Optional[str]:
        return _validate_month(value) if value is not None else None


class BudgetResponse(CamelModel):
    id: str
    user_id: str = Field(..., alias="userId")
    category_id: str = Field(..., alias="categoryId")
    month: str
    limit: float
    spent: float
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class MessageResponse(BaseModel):
    message: str


# Sign-in


class GoogleAuthRequest(CamelModel):
    """Request body for POST /v1/auth/google"""

    id_token: Optional[str] = Field(None, alias="idToken")


class UserInfo(BaseModel):
    id: str
    email: str
    name: str
    role: str


class AuthResponse(BaseModel):
    """Response for POST /v1/auth/google"""

    token: str
    user: UserInfo
