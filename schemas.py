import datetime
from pydantic import BaseModel, constr
from typing import Optional


class ExpenseCreate(BaseModel):
    category: constr(min_length=1, max_length=100)
    amount: float
    description: Optional[str] = None
    date: Optional[datetime.date] = None


class ExpenseResponse(BaseModel):
    id: int
    category: Optional[str] = None
    amount: float
    description: Optional[str] = None
    date: datetime.date

    class Config:
        from_attributes = True


class ChartData(BaseModel):
    category: str
    total: float

    class Config:
        from_attributes = True
