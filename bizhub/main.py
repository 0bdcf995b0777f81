import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizhub.core import database
from bizhub.core.settings import settings
from bizhub.domains.auth.routes import router as auth_router
from bizhub.domains.navigation.routes import router as navigation_router
from bizhub.domains.roles.routes import router as roles_router
from bizhub.domains.team.routes import router as team_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    await database.connect()
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="BizHub Access API",
    description="Roles, permissions and team access for BizHub",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(navigation_router, prefix="/api/v1")
app.include_router(roles_router, prefix="/api/v1")
app.include_router(team_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "BizHub Access API is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
