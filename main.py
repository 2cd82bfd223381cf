import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import config
from db.database import Base, engine
import models.settings  # noqa: F401  registers the options table
from routers import settings_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize the database
Base.metadata.create_all(bind=engine)

app = FastAPI(title=config.PAGE_TITLE)

# CORS configuration
origins = ["http://localhost:3000", "http://localhost:8000", "http://127.0.0.1:8000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(settings_router.router, prefix="/api")
