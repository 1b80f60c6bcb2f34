"""
infrastructure package

Shared infrastructure components for the SRS system.
Provides the relation engine interface and cache management.

Modules:
    - interfaces: Base interface for relation engines
    - cache_manager: Named TTL caches with statistics
"""

from infrastructure.interfaces import BaseRelationEngine
from infrastructure.cache_manager import CacheManager

__all__ = [
    "BaseRelationEngine",
    "CacheManager",
]
