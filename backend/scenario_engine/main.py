import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scenario_engine.config import settings
from scenario_engine.services.scenario_service import build_engine
from scenario_engine.api.routes import health, scenarios, forecasts


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: configure logging and build the scenario engine
    logging.getLogger("scenario_engine").setLevel(settings.LOG_LEVEL)
    app.state.scenario_engine = build_engine()
    yield


app = FastAPI(title="Scenario Engine", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(scenarios.router, prefix="/api")
app.include_router(forecasts.router, prefix="/api")
