# employee_records/infrastructure/database/models.py

import uuid

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text, Uuid

from employee_records.infrastructure.database.session import Base


class EmployeeRow(Base):
    """ORM model for employees. Timestamps are naive server-zone wall clock."""

    __tablename__ = "employees"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    position = Column(String, nullable=False)
    department = Column(String, nullable=True)
    email = Column(String, nullable=False, unique=True, index=True)
    hire_date = Column(Date, nullable=True)
    salary = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=False), nullable=False)
    modified_at = Column(DateTime(timezone=False), nullable=False)

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class EmployeeHistoryRow(Base):
    """Append-only history log. employee_id is deliberately not a foreign key."""

    __tablename__ = "employee_history"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    employee_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    change_type = Column(String, nullable=False)
    changes = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=False), nullable=False)
