"""API v1 router configuration."""

from fastapi import APIRouter

from odontoapp.api.v1.endpoints import (
    appointments,
    auth,
    clinics,
    health,
    navigation,
    notifications,
    profile,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(navigation.router, prefix="/navigation", tags=["Navigation"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(clinics.router, prefix="/clinics", tags=["Clinics"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
