"""
Problem Log Models
Customer complaints and incidents, linked to the employees involved
"""

from sqlalchemy import Column, Integer, String, Boolean, Date, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from foodtrace.core.database import Base


class ProblemLog(Base):
    """
    Problem Log model

    Workflow:
    1. Opened (is_open true, date_resolved empty)
    2. Closed (is_open false, date_resolved set)
    """
    __tablename__ = "problem_logs"

    id = Column(Integer, primary_key=True)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    is_open = Column(Boolean, nullable=False, default=True)
    date_opened = Column(Date, nullable=False)
    customer_name = Column(String(255), nullable=False)
    problem_type = Column(String(100), nullable=False)
    problem_description = Column(Text, nullable=False)
    recall = Column(Boolean, nullable=False, default=False)
    date_resolved = Column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "is_open = false OR date_resolved IS NULL",
            name="check_open_problem_unresolved"
        ),
    )

    # Relationships
    organization = relationship("Organization")
    employee_links = relationship("ProblemLogEmployee", viewonly=True, order_by="ProblemLogEmployee.employee_id")

    def __repr__(self):
        return f"<ProblemLog(id={self.id}, type='{self.problem_type}', open={self.is_open})>"

    @property
    def employee_ids(self):
        return [link.employee_id for link in self.employee_links]


class ProblemLogEmployee(Base):
    """Problem Log-Employee link"""
    __tablename__ = "problem_logs_employees"

    problem_log_id = Column(Integer, ForeignKey("problem_logs.id", ondelete="CASCADE"), primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True, index=True)

    # Relationships
    problem_log = relationship("ProblemLog", viewonly=True)
    employee = relationship("Employee", viewonly=True)

    def __repr__(self):
        return f"<ProblemLogEmployee(problem_log_id={self.problem_log_id}, employee_id={self.employee_id})>"
