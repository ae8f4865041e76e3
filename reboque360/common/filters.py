# reboque360/common/filters.py
"""
Фильтры списков: период по календарным дням и построитель WHERE.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, model_validator


class DateRange(BaseModel):
    """
    Период по календарным дням, обе границы включительно.
    Пустая граница = без ограничения. Границы дней в UTC.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start and self.end and self.start > self.end:
            raise ValueError("start позже end")
        return self

    @property
    def since(self) -> Optional[datetime]:
        """Начало первого дня."""
        if self.start is None:
            return None
        return datetime.combine(self.start, time.min, tzinfo=timezone.utc)

    @property
    def until(self) -> Optional[datetime]:
        """Начало дня, следующего за последним (граница исключается)."""
        if self.end is None:
            return None
        return datetime.combine(self.end + timedelta(days=1), time.min, tzinfo=timezone.utc)


class WhereBuilder:
    """
    Собирает условия WHERE с позиционными параметрами asyncpg ($1, $2...).

    Example:
        where = WhereBuilder("q.account_id = $1", account_id)
        where.add("q.status = {}", "pending")
        sql = f"SELECT ... WHERE {where.sql}"
        await db.fetch(sql, *where.params)
    """

    def __init__(self, base: str, *params: Any) -> None:
        self._clauses: list[str] = [base]
        self.params: list[Any] = list(params)

    def add(self, template: str, *values: Any) -> "WhereBuilder":
        """Добавляет условие; каждое '{}' заменяется на следующий $N."""
        placeholders = []
        for value in values:
            self.params.append(value)
            placeholders.append(f"${len(self.params)}")
        self._clauses.append(template.format(*placeholders))
        return self

    def add_date_range(self, column: str, period: DateRange | None) -> "WhereBuilder":
        if period is None:
            return self
        if period.since is not None:
            self.add(f"{column} >= {{}}", period.since)
        if period.until is not None:
            self.add(f"{column} < {{}}", period.until)
        return self

    @property
    def sql(self) -> str:
        return " AND ".join(self._clauses)
