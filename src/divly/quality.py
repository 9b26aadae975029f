"""Data quality validation for holdings before projection."""

from __future__ import annotations

from dataclasses import dataclass, field

from divly.models.holding import Holding

MAX_TYPICAL_PAYMENT_DAY = 28


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_holding(holding: Holding) -> ValidationResult:
    """Run all quality checks on a holding.

    None of these block projection; they flag inputs that will be skipped
    or fall back to a less precise schedule.

    Checks:
        1. Dividend yield present and positive
        2. Price positive
        3. Typical payment day within [1, 28]
        4. Typical payment months within 0-11
        5. History ordered most-recent-first
        6. History amounts positive
        7. Announced ex-date not after announced payment date
    """
    result = ValidationResult()

    # 1. Yield
    if not holding.dividend_yield or holding.dividend_yield < 0:
        result.checks.append(ValidationCheck(
            "dividend_yield", False, "No positive dividend yield; holding is skipped",
        ))
    else:
        result.checks.append(ValidationCheck("dividend_yield", True))

    # 2. Price
    if holding.current_price <= 0:
        result.checks.append(ValidationCheck(
            "price_positive", False, f"Price {holding.current_price} is not positive",
        ))
    else:
        result.checks.append(ValidationCheck("price_positive", True))

    # 3. Typical day; longer months would clamp to the month end
    day = holding.typical_payment_day
    if day is not None and not (isinstance(day, int) and 1 <= day <= MAX_TYPICAL_PAYMENT_DAY):
        result.checks.append(ValidationCheck(
            "typical_payment_day", False,
            f"Day {day!r} is not a whole day within 1-{MAX_TYPICAL_PAYMENT_DAY}",
        ))
    else:
        result.checks.append(ValidationCheck("typical_payment_day", True))

    # 4. Typical months
    months = holding.typical_payment_months or ()
    bad_months = [m for m in months if not (isinstance(m, int) and 0 <= m <= 11)]
    if bad_months:
        result.checks.append(ValidationCheck(
            "typical_payment_months", False,
            f"Months {bad_months} are not within 0-11 and are ignored",
        ))
    else:
        result.checks.append(ValidationCheck("typical_payment_months", True))

    # 5. History ordering
    history = holding.dividend_history
    out_of_order = sum(
        1 for i in range(1, len(history))
        if history[i].ex_date > history[i - 1].ex_date
    )
    if out_of_order:
        result.checks.append(ValidationCheck(
            "history_order", False, f"{out_of_order} entries newer than their predecessor",
        ))
    else:
        result.checks.append(ValidationCheck("history_order", True))

    # 6. History amounts
    non_positive = sum(1 for h in history if h.amount <= 0)
    if non_positive:
        result.checks.append(ValidationCheck(
            "history_amounts", False, f"{non_positive} entries with non-positive amount",
        ))
    else:
        result.checks.append(ValidationCheck("history_amounts", True))

    # 7. Announced dates
    if (
        holding.next_ex_date is not None
        and holding.next_payment_date is not None
        and holding.next_ex_date > holding.next_payment_date
    ):
        result.checks.append(ValidationCheck(
            "next_dates_order", False, "Next ex-date is after next payment date",
        ))
    else:
        result.checks.append(ValidationCheck("next_dates_order", True))

    return result


def validate_holdings(holdings: list[Holding]) -> dict[str, ValidationResult]:
    """Validate each holding, keyed by symbol."""
    return {h.symbol: validate_holding(h) for h in holdings}
