"""
orbitrum/models/account.py

Account snapshot: the immutable record every token computation runs against.

The snapshot is read from the account store at the start of an operation and
never cached by the engine. Counters only ever grow, and only through the
store after an authorization succeeds.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PlanName(str, Enum):
    """Plan tiers. ``none`` means no active plan."""
    NONE = "none"
    BASIC = "basic"
    STANDARD = "standard"
    PRO = "pro"
    MAX = "max"


class Role(str, Enum):
    CLIENT = "client"
    PROFESSIONAL = "professional"
    ADMIN = "admin"


class DocumentsStatus(str, Enum):
    """Identity document review state."""
    PENDING = "pending"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


def to_decimal(value) -> Decimal:
    """Convert a numeric value to Decimal without binary float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


class AccountSnapshot(BaseModel):
    """
    Token and credit state of one account.

    Tokens (plan, earned, purchased, spent) are whole numbers; credits track
    cashback separately and are decimals. Keys may be given in snake_case or
    camelCase (``planTokens``), which is how the account store hands them over.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    plan_name: PlanName = PlanName.NONE
    plan_start_date: Optional[date] = None

    plan_tokens: int = Field(default=0, ge=0)
    earned_tokens: int = Field(default=0, ge=0)
    purchased_tokens: int = Field(default=0, ge=0)
    spent_tokens: int = Field(default=0, ge=0)

    accrued_credits: Decimal = Field(default=Decimal("0"), ge=0)
    withdrawn_credits: Decimal = Field(default=Decimal("0"), ge=0)

    role: Role = Role.CLIENT
    documents_status: DocumentsStatus = DocumentsStatus.PENDING

    @field_validator("accrued_credits", "withdrawn_credits", mode="before")
    @classmethod
    def _credits_as_decimal(cls, value):
        if isinstance(value, (int, float, Decimal)):
            return to_decimal(value)
        return value

    @property
    def has_verified_documents(self) -> bool:
        return self.documents_status == DocumentsStatus.APPROVED

    @property
    def has_active_plan(self) -> bool:
        return self.plan_start_date is not None and self.plan_name != PlanName.NONE
