"""
API route handlers.
"""
