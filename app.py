import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from paysign.config import settings
from paysign.routers.public import router as public_router
from paysign.middleware import BodySizeLimitMiddleware, RequestMetricsMiddleware

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")

app = FastAPI(
    title="Paysign",
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None,
)

app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(RequestMetricsMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(public_router)
