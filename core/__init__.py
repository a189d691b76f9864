"""Core business logic for Synergy Engine.

This package contains the numeric analysis, the insight request lifecycle,
and the LLM provider layer. It has ZERO dependency on any UI framework.
"""

__version__ = "0.1.0"
