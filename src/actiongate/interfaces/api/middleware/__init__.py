"""Falcon middleware."""

from actiongate.interfaces.api.middleware.auth import BearerTokenMiddleware
from actiongate.interfaces.api.middleware.cors import CORSMiddleware
from actiongate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware

__all__ = ["BearerTokenMiddleware", "CORSMiddleware", "PoolLifespanMiddleware"]
