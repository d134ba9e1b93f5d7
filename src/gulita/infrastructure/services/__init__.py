"""Clients for external services."""

from gulita.infrastructure.services.prediction_client import PredictionClient

__all__ = ["PredictionClient"]
