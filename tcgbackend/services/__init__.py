"""
TCG backend services.

Business logic for deck management and authentication.
"""
