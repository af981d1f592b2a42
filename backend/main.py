from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from core.logger import setup_logger
from routers.inventory import router as inventory_router
from routers.measurement import router as measurement_router

setup_logger(log_level=settings.log_level)

app = FastAPI(
    title=settings.app_title,
    description="Container-level stock deduction and unit vocabularies for lab inventory",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


# Stock deduction / restock routes
app.include_router(inventory_router, prefix="/inventory", tags=["inventory"])

# Category vocabularies (units, container types)
app.include_router(measurement_router, prefix="/measurement", tags=["measurement"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
