"""Telemetry and observability helpers.

This package emits deterministic handler events for auditing host invocations.
"""

from .logger import HandlerLogger

__all__ = ["HandlerLogger"]
