"""
Single-period interest and per diem endpoints
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from .dependencies import CalculatorContext, get_context
from .schemas import CalculateInterestRequest, PerDiemRequest, PerDiemResponse
from ..calculator import InterestPeriodCalculator
from ..dates import to_date_or_none
from ..logging_config import log_action
from ..money import format_money, to_decimal
from ..per_diem import PerDiemCalculator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/calculate")
async def calculate_interest(
    request: CalculateInterestRequest,
    context: CalculatorContext = Depends(get_context)
):
    """Calculate prejudgment or postjudgment interest for one date range"""
    jurisdiction = context.jurisdiction(request.jurisdiction)
    calculator = InterestPeriodCalculator(
        context.rate_sheet.table_for(jurisdiction),
        end_date_accrues=context.config.end_date_accrues,
        payments_before_damages=context.config.payments_before_damages
    )

    result = calculator.compute(
        request.mode,
        request.start_date,
        request.end_date,
        request.principal,
        special_damages=[damage.model_dump() for damage in request.special_damages],
        payments=[payment.model_dump() for payment in request.payments]
    )

    log_action(
        logger, "info", "Interest calculated",
        action="calculate",
        jurisdiction=jurisdiction,
        mode=result.mode.value,
        extra={"rows": len(result.details), "rates_unavailable": result.rates_unavailable}
    )

    response = result.to_dict()
    response["jurisdiction"] = jurisdiction
    response["total_display"] = format_money(result.total, context.config.display_precision)
    return response


@router.post("/per-diem", response_model=PerDiemResponse)
async def calculate_per_diem(
    request: PerDiemRequest,
    context: CalculatorContext = Depends(get_context)
):
    """Daily interest on a balance at the rate in effect on a date"""
    on = to_date_or_none(request.date)
    if on is None:
        raise HTTPException(status_code=400, detail=f"Invalid date '{request.date}'")
    try:
        balance = to_decimal(request.balance)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    jurisdiction = context.jurisdiction(request.jurisdiction)
    table = context.rate_sheet.table_for(jurisdiction)
    if table is None:
        raise HTTPException(
            status_code=404,
            detail=f"Interest rates are not available for jurisdiction {jurisdiction}"
        )

    amount = PerDiemCalculator(table).per_diem(
        balance, on, use_postjudgment_rate=request.use_postjudgment_rate
    )
    return PerDiemResponse(
        jurisdiction=jurisdiction,
        date=on.isoformat(),
        per_diem=str(amount),
        per_diem_display=format_money(amount, context.config.display_precision)
    )
