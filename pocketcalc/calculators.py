"""Core calculation utilities.

Every function here is a pure function of its arguments: records in,
``Decimal`` figures out. Formatting for display is left to the UI layer.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Dict, Hashable, Iterable, List, Optional

import pandas as pd

from pocketcalc.errors import InvalidDebtVariant, InvalidFrequency
from pocketcalc.models import (
    AmortizationPoint,
    BudgetData,
    BudgetSummary,
    CategoryShare,
    CreditCardDebt,
    FixedLoanDebt,
    Frequency,
    LoanApplication,
    LoanQualification,
    MortgageDebt,
    MortgagePaymentFrequency,
    NetWorthData,
    NetWorthSummary,
    RevolvingCreditDebt,
)
from pocketcalc.presets import (
    ACCELERATED_BIWEEKLY_PERIODS,
    MONTHS_PER_YEAR,
    PERIODS_PER_YEAR,
    PolicySettings,
    get_policy,
)

log = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def money(x) -> Decimal:
    """Return ``x`` as a ``Decimal``.

    Floats go through ``str`` so ``0.1`` stays ``0.1`` instead of picking up
    binary noise.
    """

    if isinstance(x, Decimal):
        return x
    if isinstance(x, float):
        return Decimal(str(x))
    return Decimal(x)


# ---------------------------------------------------------------------------
# Frequency normalization
# ---------------------------------------------------------------------------


def to_monthly(amount, frequency) -> Decimal:
    """Convert a periodic ``amount`` into its monthly equivalent.

    ``frequency`` may be a :class:`Frequency` or its string value. Weekly
    amounts are scaled by 52/12, bi-weekly by 26/12 and annual amounts are
    divided by 12. Anything else raises :class:`InvalidFrequency`.
    """

    try:
        freq = Frequency(frequency)
    except ValueError:
        log.warning("rejecting amount with unsupported frequency %r", frequency)
        raise InvalidFrequency(frequency) from None
    amt = money(amount)
    if freq is Frequency.MONTHLY:
        return amt
    if freq is Frequency.ANNUALLY:
        return amt / MONTHS_PER_YEAR
    return amt * PERIODS_PER_YEAR[freq.value] / MONTHS_PER_YEAR


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def _amount(r):
    return r.amount


def _frequency(r):
    return r.frequency


def sum_monthly(
    records: Iterable,
    amount_of: Callable = _amount,
    frequency_of: Callable = _frequency,
) -> Decimal:
    """Sum the monthly equivalent of every record. An empty list sums to 0."""

    return sum((to_monthly(amount_of(r), frequency_of(r)) for r in records), ZERO)


def grouped_monthly(
    records: Iterable,
    key_of: Callable,
    amount_of: Callable = _amount,
    frequency_of: Callable = _frequency,
) -> Dict[Hashable, Decimal]:
    """Accumulate monthly amounts per key, keyed in first-seen order."""

    out: Dict[Hashable, Decimal] = {}
    for r in records:
        k = key_of(r)
        out[k] = out.get(k, ZERO) + to_monthly(amount_of(r), frequency_of(r))
    return out


def grouped_total(records: Iterable, key_of: Callable, value_of: Callable) -> Dict[Hashable, Decimal]:
    """Like :func:`grouped_monthly` for point-in-time values (assets, liabilities)."""

    out: Dict[Hashable, Decimal] = {}
    for r in records:
        k = key_of(r)
        out[k] = out.get(k, ZERO) + money(value_of(r))
    return out


def breakdown(groups: Dict[Hashable, Decimal]) -> List[CategoryShare]:
    """Attach each group's share of the total.

    Percentages are only filled in when the total is nonzero; with a zero
    total every ``percentage`` is ``None``.
    """

    total = sum(groups.values(), ZERO)
    return [
        CategoryShare(
            key=str(k),
            amount=v,
            percentage=(v / total * HUNDRED) if total != 0 else None,
        )
        for k, v in groups.items()
    ]


def breakdown_frame(shares: List[CategoryShare], label: str = "Category") -> pd.DataFrame:
    """Tabulate a breakdown for charting."""

    if not shares:
        return pd.DataFrame(columns=[label, "Amount", "Percentage"])
    return pd.DataFrame(
        {
            label: [s.key for s in shares],
            "Amount": [float(s.amount) for s in shares],
            "Percentage": [None if s.percentage is None else float(s.percentage) for s in shares],
        }
    )


# ---------------------------------------------------------------------------
# Debts
# ---------------------------------------------------------------------------


def mortgage_monthly_payment(payment, payment_frequency) -> Decimal:
    """Normalize a mortgage payment to a monthly figure.

    Accelerated bi-weekly payments use the plain bi-weekly factor (26/12).
    """

    try:
        freq = MortgagePaymentFrequency(payment_frequency)
    except ValueError:
        log.warning("rejecting mortgage payment with unsupported frequency %r", payment_frequency)
        raise InvalidFrequency(payment_frequency) from None
    pmt = money(payment)
    if freq is MortgagePaymentFrequency.WEEKLY:
        return pmt * PERIODS_PER_YEAR["weekly"] / MONTHS_PER_YEAR
    if freq is MortgagePaymentFrequency.BIWEEKLY:
        return pmt * PERIODS_PER_YEAR["biweekly"] / MONTHS_PER_YEAR
    if freq is MortgagePaymentFrequency.ACCELERATED_BIWEEKLY:
        return pmt * ACCELERATED_BIWEEKLY_PERIODS / MONTHS_PER_YEAR
    return pmt


def monthly_debt_payment(debt) -> Decimal:
    """Monthly obligation for a single debt record.

    * fixed-term loans report their stated payment amount;
    * credit cards report their minimum payment;
    * revolving credit on an interest-only plan pays ``balance * rate / 12``,
      otherwise the minimum payment;
    * mortgages convert their stated payment by payment frequency.
    """

    if isinstance(debt, FixedLoanDebt):
        return debt.payment_amount
    if isinstance(debt, CreditCardDebt):
        return debt.min_payment
    if isinstance(debt, RevolvingCreditDebt):
        if debt.payment_type == "interest-only":
            return debt.balance * debt.interest_rate / HUNDRED / MONTHS_PER_YEAR
        return debt.min_payment
    if isinstance(debt, MortgageDebt):
        return mortgage_monthly_payment(debt.payment_amount, debt.payment_frequency)
    raise InvalidDebtVariant(getattr(debt, "type", type(debt).__name__))


def total_monthly_debt(debts: Iterable) -> Decimal:
    return sum((monthly_debt_payment(d) for d in debts), ZERO)


# ---------------------------------------------------------------------------
# Loan qualification
# ---------------------------------------------------------------------------


def monthly_rate(annual_rate_pct) -> Decimal:
    return money(annual_rate_pct) / HUNDRED / MONTHS_PER_YEAR


def max_monthly_payment(total_income, total_debt, ceiling_pct=None) -> Decimal:
    """Payment room left under the debt service ceiling (may be negative)."""

    if ceiling_pct is None:
        ceiling_pct = get_policy().tdsr_ceiling_pct
    return money(total_income) * money(ceiling_pct) / HUNDRED - money(total_debt)


def payment_count(term_years) -> int:
    """Number of monthly payments in a term given in (possibly fractional) years."""
    return int(money(term_years) * MONTHS_PER_YEAR)


def principal_from_payment(payment, annual_rate_pct, term_years) -> Decimal:
    """Reverse amortization to find the loan amount for a given payment.

    With a zero rate the annuity factor collapses to the number of payments.
    """

    P = money(payment)
    r = monthly_rate(annual_rate_pct)
    n = payment_count(term_years)
    if n <= 0:
        return ZERO
    if r == 0:
        return P * n
    return P * (1 - (1 + r) ** -n) / r


def max_loan_amount(total_income, total_debt, annual_rate_pct, term_years, ceiling_pct=None) -> Decimal:
    """Largest principal whose payment fits under the debt service ceiling.

    Floors at zero when existing debt already exceeds the ceiling.
    """

    pmt = max_monthly_payment(total_income, total_debt, ceiling_pct)
    return max(ZERO, principal_from_payment(pmt, annual_rate_pct, term_years))


def tdsr(total_debt, total_income) -> Optional[Decimal]:
    """Total debt service ratio in percent, or ``None`` without income."""

    inc = money(total_income)
    if inc == 0:
        return None
    return money(total_debt) / inc * HUNDRED


def required_down_payment(max_loan, min_pct=None) -> Decimal:
    if min_pct is None:
        min_pct = get_policy().min_down_payment_pct
    return money(max_loan) * money(min_pct) / HUNDRED


def loan_principal(max_loan, down_payment=None, legacy: bool = False) -> Decimal:
    """Principal left to finance after the down payment.

    ``legacy`` reproduces the older ``min(max_loan, max_loan - down_payment)``
    sizing, which ignores non-positive down payments differently and is not
    floored at zero.
    """

    loan = money(max_loan)
    dp = money(down_payment or 0)
    if legacy:
        return min(loan, loan - dp)
    return max(ZERO, loan - dp)


def level_payment(principal, annual_rate_pct, n_payments: int) -> Decimal:
    """Fixed monthly payment that retires ``principal`` in ``n_payments``."""

    L = money(principal)
    r = monthly_rate(annual_rate_pct)
    if n_payments <= 0:
        return ZERO
    if r == 0:
        return L / n_payments
    growth = (1 + r) ** n_payments
    return L * r * growth / (growth - 1)


def amortization_schedule(principal, annual_rate_pct, term_years) -> List[AmortizationPoint]:
    """Year-end balance and cumulative payments under a level payment plan.

    One point is recorded every 12 months, so a ``term_years`` loan yields
    ``term_years`` points. Balances are floored at zero for display.
    """

    n = payment_count(term_years)
    r = monthly_rate(annual_rate_pct)
    pmt = level_payment(principal, annual_rate_pct, n)
    balance = money(principal)
    schedule: List[AmortizationPoint] = []
    for month in range(1, n + 1):
        interest = balance * r
        balance -= pmt - interest
        if month % MONTHS_PER_YEAR == 0:
            schedule.append(
                AmortizationPoint(
                    year=month // MONTHS_PER_YEAR,
                    balance=max(ZERO, balance),
                    total_paid=pmt * month,
                )
            )
    return schedule


def schedule_frame(schedule: List[AmortizationPoint]) -> pd.DataFrame:
    """Amortization points as a year-indexed frame for line charts."""

    df = pd.DataFrame(
        {
            "Year": [p.year for p in schedule],
            "Remaining Balance": [float(p.balance) for p in schedule],
            "Total Paid": [float(p.total_paid) for p in schedule],
        }
    )
    return df.set_index("Year")


def qualify(application: LoanApplication, policy: Optional[PolicySettings] = None) -> LoanQualification:
    """Run the full loan qualification for an application snapshot."""

    policy = policy or get_policy()
    income = sum_monthly(application.incomes)
    debt = total_monthly_debt(application.debts)
    room = max_monthly_payment(income, debt, policy.tdsr_ceiling_pct)
    max_loan = max_loan_amount(
        income, debt, application.interest_rate, application.term, policy.tdsr_ceiling_pct
    )
    ratio = tdsr(debt, income)

    is_mortgage = application.type == "mortgage"
    down_payment = money(application.down_payment or 0) if is_mortgage else ZERO
    principal = loan_principal(max_loan, down_payment, legacy=policy.legacy_down_payment_formula)
    n = payment_count(application.term)

    log.debug(
        "qualify type=%s income=%s debt=%s max_loan=%s principal=%s",
        application.type,
        income,
        debt,
        max_loan,
        principal,
    )
    return LoanQualification(
        loan_type=application.type,
        total_monthly_income=income,
        total_monthly_debt=debt,
        tdsr=ratio,
        tdsr_ceiling=policy.tdsr_ceiling_pct,
        tdsr_exceeds_limit=ratio is not None and ratio > policy.tdsr_ceiling_pct,
        max_monthly_payment=room,
        max_loan=max_loan,
        down_payment=down_payment,
        required_down_payment=(
            required_down_payment(max_loan, policy.min_down_payment_pct) if is_mortgage else None
        ),
        principal=principal,
        monthly_payment=level_payment(principal, application.interest_rate, n),
        schedule=amortization_schedule(principal, application.interest_rate, application.term),
    )


# ---------------------------------------------------------------------------
# Budget and net worth
# ---------------------------------------------------------------------------


def budget_summary(data: BudgetData) -> BudgetSummary:
    """Monthly income, expenses and balance with a per-category breakdown."""

    income = sum_monthly(data.income)
    expenses = sum_monthly(data.expenses)
    by_kind = grouped_monthly(data.expenses, key_of=lambda e: e.type)
    by_category = grouped_monthly(data.expenses, key_of=lambda e: e.category)
    log.debug("budget income=%s expenses=%s", income, expenses)
    return BudgetSummary(
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        by_category=breakdown(by_category),
        fixed_expenses=by_kind.get("fixed", ZERO),
        variable_expenses=by_kind.get("variable", ZERO),
    )


def net_worth_summary(data: NetWorthData) -> NetWorthSummary:
    """Total assets less total liabilities, plus chart slices per type."""

    assets = sum((a.value for a in data.assets), ZERO)
    liabilities = sum((li.value for li in data.liabilities), ZERO)
    chart = breakdown({"Total Assets": assets, "Total Liabilities": liabilities})
    log.debug("net worth assets=%s liabilities=%s", assets, liabilities)
    return NetWorthSummary(
        total_assets=assets,
        total_liabilities=liabilities,
        net_worth=assets - liabilities,
        chart=chart,
        assets_by_type=breakdown(grouped_total(data.assets, lambda a: a.type, lambda a: a.value)),
        liabilities_by_type=breakdown(
            grouped_total(data.liabilities, lambda li: li.type, lambda li: li.value)
        ),
    )
