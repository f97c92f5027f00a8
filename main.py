from fastapi import FastAPI
import logging

from db import init_db
from routes import forecast, subscriptions

logger = logging.getLogger(__name__)

app = FastAPI(title="Subscription Tracker")


@app.on_event("startup")
def startup():
    init_db()
    logger.info("Subscription tracker started")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(subscriptions.router)
app.include_router(forecast.router)
