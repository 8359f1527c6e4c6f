"""Game domain services: session coordination, scoring and round timers.

This package contains the trivia session logic that socket handlers and
HTTP routes call into, keeping transport concerns separated from core game
mechanics.
"""
