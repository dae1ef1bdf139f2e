"""
Routes Module

Contains the FastAPI routers for health, generation functions, wizard,
account, billing and admin endpoints.
"""
