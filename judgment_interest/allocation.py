"""
Payment Allocation Module

Payments on a judgment debt go to outstanding interest first and only then to
principal. Unpaid interest is kept as a separate running balance and is never
added to principal, so interest stays simple.
"""

from dataclasses import dataclass
from decimal import Decimal

from .money import ZERO


@dataclass(frozen=True)
class PaymentAllocation:
    """How one payment was split"""
    interest_applied: Decimal
    principal_applied: Decimal
    remaining_principal: Decimal    # May be negative for an overpayment (credit balance)


class PaymentAllocator:
    """Splits payments between accrued interest and principal"""

    def allocate(
        self,
        accrued_interest: Decimal,
        running_principal: Decimal,
        payment_amount: Decimal
    ) -> PaymentAllocation:
        """
        Apply a payment to accrued interest, then to principal

        Args:
            accrued_interest: Interest accrued and not yet paid as of the payment date
            running_principal: Principal balance before the payment
            payment_amount: Amount paid

        Returns:
            PaymentAllocation; principal_applied is whatever the interest did not absorb
        """
        interest_applied = min(payment_amount, max(accrued_interest, ZERO))
        principal_applied = payment_amount - interest_applied

        return PaymentAllocation(
            interest_applied=interest_applied,
            principal_applied=principal_applied,
            remaining_principal=running_principal - principal_applied
        )
