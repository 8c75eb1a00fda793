"""
Judgment recalculation endpoint
"""

import logging
import uuid
from fastapi import APIRouter, HTTPException, Depends

from .dependencies import CalculatorContext, get_context
from .schemas import RecalculateJudgmentRequest
from ..judgment import recalculate
from ..logging_config import log_action
from ..money import format_money


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/recalculate")
async def recalculate_judgment(
    request: RecalculateJudgmentRequest,
    context: CalculatorContext = Depends(get_context)
):
    """Recalculate prejudgment interest, postjudgment interest and the total owing"""
    calculation_id = str(uuid.uuid4())
    try:
        inputs = request.to_inputs(context.config.default_jurisdiction)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    summary = recalculate(
        inputs,
        context.rate_sheet,
        end_date_accrues=context.config.end_date_accrues,
        payments_before_damages=context.config.payments_before_damages
    )

    log_action(
        logger, "info", "Judgment recalculated",
        action="recalculate",
        jurisdiction=inputs.jurisdiction,
        calculation_id=calculation_id,
        extra={
            "validation_error": summary.validation_error,
            "rates_unavailable": summary.rates_unavailable,
            "skipped_events": len(summary.skipped_events)
        }
    )

    response = summary.to_dict()
    response["calculation_id"] = calculation_id
    response["total_owing_display"] = format_money(
        summary.total_owing, context.config.display_precision
    )
    return response
