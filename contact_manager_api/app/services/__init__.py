"""
Service layer.

``contact_service`` contains the contact store; route handlers never
issue SQL themselves.
"""
