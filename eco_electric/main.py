import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eco_electric.catalog import router as catalog_router
from eco_electric.config import get_settings
from eco_electric.database import init_db
from eco_electric.errors import ServiceError, service_error_handler
from eco_electric.routes import router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Eco Electric")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceError, service_error_handler)

app.include_router(router)
app.include_router(catalog_router)

init_db()


@app.get("/")
def root():
    return "Eco Electric server is running"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
