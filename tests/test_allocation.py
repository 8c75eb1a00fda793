"""
Test suite for payment allocation

Payments go to accrued interest first, then to principal.
"""

from decimal import Decimal

from judgment_interest.allocation import PaymentAllocator


class TestPaymentAllocator:
    """Test splitting payments between interest and principal"""

    def setup_method(self):
        """Set up test fixtures"""
        self.allocator = PaymentAllocator()

    def test_interest_absorbed_first(self):
        """$500 against $200 of interest: $200 interest, $300 principal"""
        allocation = self.allocator.allocate(Decimal("200"), Decimal("73200"), Decimal("500"))

        assert allocation.interest_applied == Decimal("200")
        assert allocation.principal_applied == Decimal("300")
        assert allocation.remaining_principal == Decimal("72900")

    def test_payment_smaller_than_interest(self):
        allocation = self.allocator.allocate(Decimal("200"), Decimal("1000"), Decimal("50"))

        assert allocation.interest_applied == Decimal("50")
        assert allocation.principal_applied == Decimal("0")
        assert allocation.remaining_principal == Decimal("1000")

    def test_no_interest_accrued(self):
        allocation = self.allocator.allocate(Decimal("0"), Decimal("1000"), Decimal("250"))

        assert allocation.interest_applied == Decimal("0")
        assert allocation.principal_applied == Decimal("250")

    def test_overpayment_leaves_credit_balance(self):
        """Paying more than is owed drives principal negative rather than failing"""
        allocation = self.allocator.allocate(Decimal("10"), Decimal("100"), Decimal("150"))

        assert allocation.principal_applied == Decimal("140")
        assert allocation.remaining_principal == Decimal("-40")

    def test_negative_accrual_treated_as_zero(self):
        allocation = self.allocator.allocate(Decimal("-5"), Decimal("100"), Decimal("20"))
        assert allocation.interest_applied == Decimal("0")
        assert allocation.principal_applied == Decimal("20")
