"""Pure aggregation over the transaction list.

Every function here is a function of its arguments only: the transaction
list, a filter or budget list, and the date treated as "today". Upstream
fetch failures are absorbed before these run, so empty inputs simply give
empty results.
"""
from collections.abc import Iterable
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from ..schemas import (
    ALL,
    Budget,
    BudgetAggregate,
    BudgetInsights,
    BudgetStatus,
    BudgetTotals,
    CategoryAggregate,
    CategoryInsights,
    Filter,
    Stats,
    Transaction,
    TransactionType,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
NEAR_BUDGET_THRESHOLD = Decimal("80")
COMFORT_RATIO = Decimal("0.8")

_CENT = Decimal("0.01")
_TENTH = Decimal("0.1")


def round_money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def round_percentage(value: Decimal) -> Decimal:
    return value.quantize(_TENTH, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, symbol: str = "₹") -> str:
    """Format an amount with two decimals and en-IN digit grouping.

    >>> format_currency(Decimal("100000"))
    '₹1,00,000.00'
    """
    value = round_money(Decimal(amount))
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        whole = ",".join(pairs + [tail])

    return f"{sign}{symbol}{whole}.{fraction}"


# --- Filtering ---

def matches_filter(transaction: Transaction, filter_: Filter) -> bool:
    """Date, category and type clauses, all required."""
    # Dates are calendar days, so the end bound covers the whole end day
    in_range = filter_.start_date <= transaction.date <= filter_.end_date
    category_ok = filter_.category == ALL or transaction.category == filter_.category
    type_ok = filter_.type.value == ALL or transaction.type.value == filter_.type.value
    return in_range and category_ok and type_ok


def filter_transactions(
    transactions: Iterable[Transaction],
    filter_: Filter,
) -> list[Transaction]:
    """Transactions selected by the filter, in their original order."""
    return [t for t in transactions if matches_filter(t, filter_)]


# --- Category breakdown ---

def aggregate_by_category(transactions: Iterable[Transaction]) -> list[CategoryAggregate]:
    """Per-category totals, counts and share of the overall total.

    Sorted by amount, largest first; categories with equal amounts keep the
    order in which they were first seen. An empty or zero-total input gives
    an empty list.
    """
    groups: dict[str, list] = {}
    for t in transactions:
        entry = groups.setdefault(t.category, [ZERO, 0])
        entry[0] += t.amount
        entry[1] += 1

    total = sum((amount for amount, _ in groups.values()), ZERO)
    if total == 0:
        return []

    rows = []
    for category, (amount, count) in groups.items():
        rounded = round_money(amount)
        rows.append(CategoryAggregate(
            category=category,
            amount=rounded,
            count=count,
            percentage=round_percentage(rounded / total * HUNDRED),
        ))

    rows.sort(key=lambda row: row.amount, reverse=True)
    return rows


def category_insights(rows: list[CategoryAggregate]) -> CategoryInsights:
    """Largest and most frequent categories of a breakdown."""
    if not rows:
        return CategoryInsights()
    # max keeps the first row on ties, so the breakdown order decides
    top = max(rows, key=lambda row: row.amount)
    frequent = max(rows, key=lambda row: row.count)
    return CategoryInsights(
        top_category=top.category,
        top_amount=top.amount,
        top_percentage=top.percentage,
        frequent_category=frequent.category,
        frequent_count=frequent.count,
    )


# --- Budgets ---

def expenses_by_category(
    transactions: Iterable[Transaction],
    month: int,
    year: int,
) -> dict[str, Decimal]:
    """Sum of expense amounts per category for one calendar month."""
    spending: dict[str, Decimal] = {}
    for t in transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        if t.date.month != month or t.date.year != year:
            continue
        spending[t.category] = spending.get(t.category, ZERO) + t.amount
    return spending


def compute_budget_rollup(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    month: int,
    year: int,
) -> list[BudgetAggregate]:
    """Budget against spending for the given month, one row per budget.

    The month and year are those of the spending window, not the budget's own
    month/year fields; callers pass the current calendar month.
    """
    spending = expenses_by_category(transactions, month, year)
    return [
        BudgetAggregate(
            category=b.category,
            budget=b.amount,
            spent=spending.get(b.category, ZERO),
        )
        for b in budgets
    ]


def budget_status(budget: Budget, spent: Decimal, symbol: str = "₹") -> BudgetStatus:
    """Usage figures and warning flags for one budget."""
    amount = budget.amount
    if amount > 0:
        percentage = spent / amount * HUNDRED
    else:
        percentage = ZERO

    # A zero cap can never be exceeded
    over_budget = amount > 0 and spent > amount
    near_budget = not over_budget and NEAR_BUDGET_THRESHOLD < percentage <= HUNDRED
    remaining = amount - spent

    if over_budget:
        status_text = f"Over by {format_currency(spent - amount, symbol)}"
    else:
        status_text = f"{format_currency(remaining, symbol)} remaining"

    return BudgetStatus(
        id=budget.id,
        category=budget.category,
        amount=amount,
        spent=spent,
        month=budget.month,
        year=budget.year,
        percentage_used=round_percentage(percentage),
        remaining=remaining,
        over_budget=over_budget,
        near_budget=near_budget,
        status_text=status_text,
    )


def apply_current_spending(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    today: date,
    symbol: str = "₹",
) -> list[BudgetStatus]:
    """Status of every budget against this month's expenses."""
    budgets = list(budgets)
    rollup = compute_budget_rollup(budgets, transactions, today.month, today.year)
    return [
        budget_status(b, row.spent, symbol)
        for b, row in zip(budgets, rollup)
    ]


def budget_totals(statuses: Iterable[BudgetStatus]) -> BudgetTotals:
    statuses = list(statuses)
    total_budget = sum((s.amount for s in statuses), ZERO)
    total_spent = sum((s.spent for s in statuses), ZERO)
    return BudgetTotals(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
    )


def budget_insights(statuses: Iterable[BudgetStatus]) -> BudgetInsights:
    statuses = list(statuses)
    if not statuses:
        return BudgetInsights()
    top = max(statuses, key=lambda s: s.spent)
    return BudgetInsights(
        top_category=top.category,
        top_spent=top.spent,
        over_budget=[s.category for s in statuses if s.over_budget],
        under_80_percent=[s.category for s in statuses if s.spent <= s.amount * COMFORT_RATIO],
    )


# --- Dashboard ---

def _sum_type(transactions: Iterable[Transaction], type_: TransactionType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == type_), ZERO)


def calculate_stats(transactions: Iterable[Transaction], today: date) -> Stats:
    """All-time and current-month income and expense totals."""
    transactions = list(transactions)
    this_month = [
        t for t in transactions
        if t.date.month == today.month and t.date.year == today.year
    ]

    total_income = _sum_type(transactions, TransactionType.INCOME)
    total_expenses = _sum_type(transactions, TransactionType.EXPENSE)

    return Stats(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        monthly_income=_sum_type(this_month, TransactionType.INCOME),
        monthly_expenses=_sum_type(this_month, TransactionType.EXPENSE),
    )
