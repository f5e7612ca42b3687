import logging
import math
from decimal import Decimal
from typing import Protocol

from sqlalchemy import func, select

from config import UNCATEGORIZED
from database import Expense, ExpenseContext
from schemas import ChartData

logger = logging.getLogger(__name__)


class InvalidExpenseError(ValueError):
    """Raised before any write when an expense cannot be stored."""


class ExpensesServiceProtocol(Protocol):
    async def add(self, expense: Expense) -> None: ...

    async def get_all(self) -> list[Expense]: ...

    async def get_chart_data(self) -> list[ChartData]: ...


def validate_expense(expense: Expense):
    category = expense.category
    if category is None or not str(category).strip():
        raise InvalidExpenseError("Expense category is required")

    amount = expense.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise InvalidExpenseError(f"Expense amount must be a number, got {amount!r}")
    finite = amount.is_finite() if isinstance(amount, Decimal) else math.isfinite(amount)
    if not finite:
        raise InvalidExpenseError(f"Expense amount must be finite, got {amount!r}")
    if amount < 0:
        raise InvalidExpenseError("Expense amount cannot be negative")


class ExpensesService:
    """Application-facing access to stored expenses.

    Built around one short-lived :class:`ExpenseContext`; storage errors
    from the context reach the caller untouched.
    """

    def __init__(self, context: ExpenseContext):
        self._context = context

    async def add(self, expense: Expense) -> None:
        validate_expense(expense)
        self._context.add(expense)
        await self._context.save_changes()
        logger.info(
            "Stored expense %s (%s, %.2f)", expense.id, expense.category, expense.amount
        )

    async def get_all(self) -> list[Expense]:
        return await self._context.all(self._context.expenses)

    async def get_chart_data(self) -> list[ChartData]:
        category = func.coalesce(Expense.category, UNCATEGORIZED).label("category")
        query = (
            select(category, func.sum(Expense.amount).label("total"))
            .group_by(category)
            .order_by(category)
        )
        rows = await self._context.rows(query)
        logger.debug("Chart data covers %d categories", len(rows))
        return [ChartData(category=row.category, total=row.total or 0.0) for row in rows]
