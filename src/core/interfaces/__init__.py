"""Core contracts (Protocol) implemented by the adapters."""

from core.interfaces.executor import RequestExecutor

__all__ = ["RequestExecutor"]
