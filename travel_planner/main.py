"""
FastAPI application entry point.

Configures logging from the environment and serves the planner router.
Run with `uvicorn travel_planner.main:app` or `python -m travel_planner.main`.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travel_planner.planner.planner_api import get_planner_config
from travel_planner.planner.planner_api import router as planner_router
from travel_planner.shared.logging import setup_logging


APP_NAME = "Travel Planner"
APP_VERSION = "0.1.0"

_config = get_planner_config()
setup_logging(_config.log_level, json_format=_config.log_format == "json")


app = FastAPI(
    title=APP_NAME,
    description="Conversational trip planning agent built with LangGraph",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planner_router)


@app.get("/")
async def root():
    """Service information and the planner's mount point."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "planner": {
            "endpoints": "/api/planner",
            "tools": "mock",
            "state_dir": _config.state_dir,
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
