from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app import config
from app.routes import auth, goals
import logging

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(
    redirect_slashes=False,
    title="Goal Tracker API",
    description="API for tracking personal goals across life areas",
    version="1.0.0",
    openapi_tags=[
        {
            "name": "Goals",
            "description": "Owner-scoped goal records and their images",
        },
    ],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth")
app.include_router(goals.router, prefix="/goals", tags=["Goals"])
