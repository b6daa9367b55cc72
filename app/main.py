# app/main.py
import uvicorn
import os
import logging
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.clock import Clock, get_clock
from app.core.database import engine, Base, get_async_session
from app.core.exceptions import ExpenseTrackerError
from app.core.auth import (
    fastapi_users,
    auth_backend,
    UserRead,
    UserCreate,
)
from app.models.user import User, Expense, Bill, BillPayment, UserSettings  # registers all mappers
from app.api.v1.routes import (
    auth,
    bills,
    expenses,
    reports,
    settings as settings_routes,
    users,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create all tables on startup (alembic/ holds the migrations for managed databases)
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and logout"},
        {"name": "expenses", "description": "Day-to-day spending"},
        {"name": "bills", "description": "Recurring monthly bills and their payments"},
        {"name": "reports", "description": "Dashboard and monthly reports"},
        {"name": "settings", "description": "Budget, currency and week preferences"},
    ],
)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",  # Local development
    "http://localhost:3001",  # Backup local port
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain errors (not authenticated, not found, duplicate payment, invalid data)
@app.exception_handler(ExpenseTrackerError)
async def domain_exception_handler(request: Request, exc: ExpenseTrackerError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.detail}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.detail}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for better error responses"""
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )
    
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
    
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

# ------------------------------------------------------------
# AUTHENTICATION ROUTES
# ------------------------------------------------------------

# Custom auth routes; included BEFORE the fastapi-users router so logout resolves here
app.include_router(
    auth.router,
    prefix="/api/v1/auth",
    tags=["Authentication"],
)

# JWT Login
app.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/api/v1/auth/jwt",
    tags=["Authentication"],
)

# Registration
app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/api/v1/auth",
    tags=["Authentication"],
)

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check(
    db: AsyncSession = Depends(get_async_session),
    clock: Clock = Depends(get_clock),
):
    """Health check endpoint, including a database round trip"""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail=f"Service unhealthy: {str(e)}")
    return {
        "status": "healthy",
        "timestamp": clock.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(users.router, prefix="/api/v1/users", tags=["User Management"])
app.include_router(expenses.router, prefix="/api/v1")
app.include_router(bills.router, prefix="/api/v1")
app.include_router(settings_routes.router, prefix="/api/v1")
app.include_router(reports.router, prefix="/api/v1")

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Startup event to create database tables"""
    try:
        await create_db_and_tables()
        logger.info("✅ Database tables created successfully")
        logger.info(f"✅ Frontend URL: {settings.FRONTEND_URL}")
    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=False)
