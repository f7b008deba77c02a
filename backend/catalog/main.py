from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.api.recipes import router as recipes_router
from catalog.api.cuisine import router as cuisine_router
from catalog.core.config import settings
from catalog.core.errors import CatalogError
from catalog.db import init_db

import logging
import sys

# Configure the root logger
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db()
    yield

app = FastAPI(title="Recipe Catalog API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


#routers
app.include_router(recipes_router, prefix="/api")
app.include_router(cuisine_router, prefix="/api")

# for local development:
# uvicorn catalog.main:app --reload
