"""Runtime engine exports."""

from .loop import RuntimeBootstrap, RuntimeEngine

__all__ = ["RuntimeBootstrap", "RuntimeEngine"]
