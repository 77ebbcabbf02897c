"""
Service layer: every query and mutation the routers perform.
"""
