"""
High-level use cases for the devlink API.

Each service orchestrates the repository and the session issuer to implement
business rules (signup, login, profile edits, the connection ledger).
Routers call these services instead of touching the database directly.
"""
