"""
Shared building blocks: settings, logging and database wiring.
"""
