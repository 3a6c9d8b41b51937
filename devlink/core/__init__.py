"""
Core utilities shared across the devlink API.

This package hosts configuration, logging setup, the error taxonomy,
credential hashing and the login rate limiter. Nothing here imports from the
routers or the storage layer.
"""
