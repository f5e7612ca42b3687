from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from database import get_db, Expense, ExpenseContext
from schemas import ExpenseCreate, ExpenseResponse, ChartData
from service import ExpensesService, ExpensesServiceProtocol, InvalidExpenseError


router = APIRouter()


def get_expenses_service(db: ExpenseContext = Depends(get_db)) -> ExpensesServiceProtocol:
    return ExpensesService(db)


@router.post(
    "/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED
)
async def create_expense(
    expense: ExpenseCreate,
    service: ExpensesServiceProtocol = Depends(get_expenses_service),
):
    db_expense = Expense(
        category=expense.category,
        amount=expense.amount,
        description=expense.description,
        date=expense.date or date.today(),
    )
    try:
        await service.add(db_expense)
    except InvalidExpenseError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return db_expense


@router.get("/expenses", response_model=list[ExpenseResponse])
async def get_expenses(service: ExpensesServiceProtocol = Depends(get_expenses_service)):
    return await service.get_all()


@router.get("/expenses/chart", response_model=list[ChartData])
async def get_chart_data(service: ExpensesServiceProtocol = Depends(get_expenses_service)):
    """Per-category spending totals for the chart front end."""
    return await service.get_chart_data()
