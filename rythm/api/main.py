# rythm/api/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rythm import __version__
from rythm.api.routes import insights_routes
from rythm.config.config_manager import ConfigManager

config = ConfigManager()
logging.basicConfig(
    level=getattr(logging, str(config.get('logging.level', 'INFO')).upper(), logging.INFO),
    format=config.get('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
)

app = FastAPI(
    title="Rythm Insights API",
    description="API for sleep and mood statistics, badges and daily motivation",
    version=__version__
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(insights_routes.router)


@app.get("/")
async def root():
    return {
        "message": "Welcome to the Rythm Insights API",
        "version": __version__,
        "documentation": "/docs"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
