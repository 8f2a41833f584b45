import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jgdshift.api.mesh import router as mesh_router
from jgdshift.api.parameters import router as parameters_router
from jgdshift.api.transform import router as transform_router
from jgdshift.config import settings, setup_logging
from jgdshift.services.registry import registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    loaded = registry.preload(settings.par_files)
    if loaded:
        logger.info("Preloaded parameter sets: %s", ", ".join(loaded))
    yield


app = FastAPI(title="JGD Grid Shift Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(parameters_router)
app.include_router(transform_router)
app.include_router(mesh_router)


@app.get("/")
def root():
    return {"status": "ok", "service": "jgd-grid-shift", "parameter_sets": registry.names()}
