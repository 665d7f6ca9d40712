"""Application ports (interfaces to external collaborators)."""

from spendsight.application.ports.savings_advisor import SavingsAdvisorPort

__all__ = ["SavingsAdvisorPort"]
