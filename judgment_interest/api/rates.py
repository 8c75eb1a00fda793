"""
Rate table endpoints
"""

from fastapi import APIRouter, HTTPException, Depends

from .dependencies import CalculatorContext, get_context
from .schemas import RatePeriodModel
from ..dates import format_date


router = APIRouter()


@router.get("")
async def list_jurisdictions(context: CalculatorContext = Depends(get_context)):
    """List jurisdictions with published rates"""
    sheet = context.rate_sheet
    return {
        "jurisdictions": sheet.jurisdictions(),
        "last_updated": format_date(sheet.last_updated),
        "valid_until": format_date(sheet.valid_until)
    }


@router.get("/{jurisdiction}")
async def get_rate_table(
    jurisdiction: str,
    context: CalculatorContext = Depends(get_context)
):
    """Get every rate period for one jurisdiction"""
    table = context.rate_sheet.table_for(jurisdiction)
    if table is None:
        raise HTTPException(
            status_code=404,
            detail=f"Interest rates are not available for jurisdiction {jurisdiction}"
        )

    return {
        "jurisdiction": jurisdiction.upper(),
        "valid_until": format_date(table.valid_until),
        "periods": [RatePeriodModel.from_period(period) for period in table]
    }
