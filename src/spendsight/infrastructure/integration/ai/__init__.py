"""AI integrations."""

from spendsight.infrastructure.integration.ai.ollama_savings_advisor import (
    OllamaSavingsAdvisor,
)

__all__ = ["OllamaSavingsAdvisor"]
