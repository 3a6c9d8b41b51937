"""
FastAPI routers grouped by domain (auth, profile, requests, user).

Each module exposes an APIRouter that devlink.app includes. Handlers stay
thin: decode the body, call a service, serialize the result.
"""
