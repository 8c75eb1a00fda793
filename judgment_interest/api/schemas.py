"""
Pydantic schemas for API requests and responses
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..judgment import JudgmentInputs
from ..rates import InterestMode, RatePeriod


class SpecialDamageModel(BaseModel):
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    amount: str = Field(..., description="Decimal amount as string")
    description: Optional[str] = None


class PaymentModel(BaseModel):
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    amount: str = Field(..., description="Decimal amount as string")


class RatePeriodModel(BaseModel):
    start_date: str
    end_date: str
    prejudgment_rate: str
    postjudgment_rate: str

    @classmethod
    def from_period(cls, period: RatePeriod) -> 'RatePeriodModel':
        return cls(
            start_date=period.start_date.isoformat(),
            end_date=period.end_date.isoformat(),
            prejudgment_rate=str(period.prejudgment_rate),
            postjudgment_rate=str(period.postjudgment_rate)
        )


# Interest schemas
class CalculateInterestRequest(BaseModel):
    mode: InterestMode
    start_date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    end_date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    principal: str = Field(..., description="Decimal amount as string")
    jurisdiction: Optional[str] = None  # Defaults to the configured jurisdiction
    special_damages: List[SpecialDamageModel] = Field(default_factory=list)
    payments: List[PaymentModel] = Field(default_factory=list)


class PerDiemRequest(BaseModel):
    balance: str = Field(..., description="Decimal amount as string")
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    jurisdiction: Optional[str] = None
    use_postjudgment_rate: bool = True


class PerDiemResponse(BaseModel):
    jurisdiction: str
    date: str
    per_diem: str
    per_diem_display: str


# Judgment schemas
class RecalculateJudgmentRequest(BaseModel):
    jurisdiction: Optional[str] = None
    judgment_awarded: str = "0"
    non_pecuniary_awarded: str = "0"
    costs_awarded: str = "0"
    prejudgment_start_date: Optional[str] = None
    date_of_judgment: Optional[str] = None
    non_pecuniary_judgment_date: Optional[str] = None
    costs_awarded_date: Optional[str] = None
    postjudgment_end_date: Optional[str] = None
    show_prejudgment: bool = True
    show_postjudgment: bool = True
    user_entered_prejudgment_interest: str = "0"
    special_damages: List[SpecialDamageModel] = Field(default_factory=list)
    payments: List[PaymentModel] = Field(default_factory=list)

    def to_inputs(self, default_jurisdiction: str) -> JudgmentInputs:
        data = self.model_dump()
        data["jurisdiction"] = self.jurisdiction or default_jurisdiction
        return JudgmentInputs.from_dict(data)
