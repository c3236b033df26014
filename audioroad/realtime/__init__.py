"""Realtime infrastructure (Socket.IO broadcaster and channel registry).

Callers and calls publish through one broadcaster so the screener desk and
the host studio stay in sync without polling.
"""
