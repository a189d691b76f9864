"""Pydantic v2 schemas shared between the API and its clients."""

from .analysis import *  # noqa: F401,F403
