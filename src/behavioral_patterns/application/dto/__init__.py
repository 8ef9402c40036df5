"""
Response DTOs for the application layer.

Always import DTOs from this package rather than from the defining modules.
"""
from behavioral_patterns.application.dto.base import BaseDTO
from behavioral_patterns.application.dto.catalog import (
    DemoResultDTO,
    PatternDetailDTO,
    PatternSummaryDTO,
)

__all__ = ["BaseDTO", "DemoResultDTO", "PatternDetailDTO", "PatternSummaryDTO"]
