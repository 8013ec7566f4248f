"""Domain model for employees. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID


def _text(value: object) -> str:
    return "null" if value is None else str(value)


def _money(value: Optional[float]) -> str:
    if value is None:
        return "null"
    # Halves round up from the shortest decimal form: 0.125 -> 0.13, 1.005 -> 1.01.
    return str(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass
class Employee:
    """
    The tracked entity kind. id, created_at, modified_at and version are owned by
    the storage layer and the lifecycle interceptor; callers set the business fields.
    """

    first_name: str
    last_name: str
    phone_number: str
    position: str
    email: str
    salary: float
    department: Optional[str] = None
    hire_date: Optional[date] = None
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    version: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{_text(self.first_name)} {_text(self.last_name)}"

    def render_snapshot(self) -> str:
        """Fixed field order; salary always rendered with two decimals."""
        return (
            f"Employee [name={self.full_name}, position={_text(self.position)}, "
            f"department={_text(self.department)}, email={_text(self.email)}, "
            f"salary={_money(self.salary)}]"
        )
