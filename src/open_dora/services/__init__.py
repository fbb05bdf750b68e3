"""Deployment frequency services."""

from .base import DeploymentFrequencyService
from .df_service import DfService
from .df_total_service import DfTotalService
from .factory import get_service

__all__ = ["DeploymentFrequencyService", "DfService", "DfTotalService", "get_service"]
