"""FastAPI application entrypoint."""

from dotenv import load_dotenv
from fastapi import FastAPI

from apr_service.adapters.inbound.http.routes import router

# Load environment variables from .env file
load_dotenv()

app = FastAPI(
    title="APR Service",
    description="Actuarial-method APR calculation for consumer-lending disclosures",
    version="0.1.0",
)

app.include_router(router)
