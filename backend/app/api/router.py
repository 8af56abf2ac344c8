from fastapi import APIRouter

from app.api.routes import health, auth, profile

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router, prefix="/health", tags=["health"])  # GET /api/health
api_router.include_router(auth.router, tags=["auth"])  # POST /api/register, /api/login, /api/logout
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])  # GET/PUT /api/profile
