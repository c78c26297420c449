# cafepay/database/database.py
"""
SQLAlchemy model for the payroll entries written by period runs.

The caller owns the engine and session; see run_payroll_period().
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

from cafepay.core.models import PayrollEntry

Base = declarative_base()


def _money_column():
    return Column(Numeric(12, 2), nullable=False, default=0)


class PayrollEntryRecord(Base):
    """Persisted payroll line for one employee in one payroll period."""

    __tablename__ = "payroll_entries"
    __table_args__ = (UniqueConstraint("payroll_period_id", "user_id", name="uq_payroll_entry_period_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    payroll_period_id = Column(String(64), nullable=False, index=True)

    total_hours = Column(Numeric(8, 2), nullable=False)
    regular_hours = Column(Numeric(8, 2), nullable=False)
    overtime_hours = Column(Numeric(8, 2), nullable=False, default=0)  # no overtime tracking
    night_diff_hours = Column(Numeric(8, 2), nullable=False)

    basic_pay = _money_column()
    holiday_pay = _money_column()
    overtime_pay = _money_column()
    night_diff_pay = _money_column()
    rest_day_pay = _money_column()
    gross_pay = _money_column()

    sss_contribution = _money_column()
    sss_loan = _money_column()
    philhealth_contribution = _money_column()
    pagibig_contribution = _money_column()
    pagibig_loan = _money_column()
    withholding_tax = _money_column()
    advances = _money_column()
    other_deductions = _money_column()
    total_deductions = _money_column()
    net_pay = _money_column()

    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_entry(cls, entry: PayrollEntry) -> "PayrollEntryRecord":
        return cls(
            user_id=str(entry.employee_id),
            payroll_period_id=str(entry.period_id),
            total_hours=entry.total_hours,
            regular_hours=entry.regular_hours,
            overtime_hours=entry.overtime_hours,
            night_diff_hours=entry.night_diff_hours,
            basic_pay=entry.basic_pay,
            holiday_pay=entry.holiday_pay,
            overtime_pay=entry.overtime_pay,
            night_diff_pay=entry.night_diff_pay,
            rest_day_pay=entry.rest_day_pay,
            gross_pay=entry.gross_pay,
            sss_contribution=entry.sss_contribution,
            sss_loan=entry.sss_loan,
            philhealth_contribution=entry.philhealth_contribution,
            pagibig_contribution=entry.pagibig_contribution,
            pagibig_loan=entry.pagibig_loan,
            withholding_tax=entry.withholding_tax,
            advances=entry.advances,
            other_deductions=entry.other_deductions,
            total_deductions=entry.total_deductions,
            net_pay=entry.net_pay,
            status="pending",
        )

    def __repr__(self):
        return f"<PayrollEntryRecord(id={self.id}, user_id={self.user_id}, period={self.payroll_period_id}, net={self.net_pay})>"


def create_tables(bind) -> None:
    """Create all tables on the given engine or connection."""
    Base.metadata.create_all(bind=bind)
