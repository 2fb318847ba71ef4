"""Domain layer: time entries, rounding rules, and money.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
