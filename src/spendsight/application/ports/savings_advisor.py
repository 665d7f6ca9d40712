"""Savings advisor port for application layer.

This abstracts the external reasoning service, allowing the application
layer to remain independent of infrastructure details like HTTP clients
and model providers.
"""

from abc import ABC, abstractmethod

from spendsight.domain.analytics.value_objects import SpendingSummary


class SavingsAdvisorPort(ABC):
    """Port interface for the external reasoning service."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Name of the model answering the requests."""

    @abstractmethod
    async def suggest_savings(self, summary: SpendingSummary) -> str:
        """Ask for savings suggestions for a category spend summary.

        Returns the raw response text. It is untrusted and must be
        validated by the caller.

        Raises
        ------
        ExternalServiceError
            If the service is unreachable, times out, answers with a
            non-success status or returns an empty response.
        """
