"""
Engine module.

Batch data loading, the trading cycle and the service loop.
"""

from .batch_loader import BatchLoader, ChunkResult
from .cycle import CycleOrchestrator, CycleReport
from .service import TradingService

__all__ = [
    'BatchLoader', 'ChunkResult',
    'CycleOrchestrator', 'CycleReport',
    'TradingService',
]
