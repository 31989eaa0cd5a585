"""Asyncio multi-party networking: mesh connection, messaging, bandwidth shaping and buffer tools."""

__version__ = "0.1.0"