import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from concierge import __version__
from concierge.config import settings
from concierge.routes import calculations, points, payouts, inbox, settlements


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup resources."""
    configure_logging()
    logging.getLogger(__name__).info(f'Concierge API starting (env={settings.env})')
    yield


app = FastAPI(
    title='Concierge Ops API',
    description='Inbox ranking, payout rules and settlement for the staff console',
    version=__version__,
    lifespan=lifespan,
)

# CORS for the staff console
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

# Routes
app.include_router(calculations.router, prefix='/api/calculations', tags=['calculations'])
app.include_router(points.router, prefix='/api/points', tags=['points'])
app.include_router(payouts.router, prefix='/api/payouts', tags=['payouts'])
app.include_router(inbox.router, prefix='/api/inbox', tags=['inbox'])
app.include_router(settlements.router, prefix='/api/settlements', tags=['settlements'])


@app.get('/health')
async def health_check():
    """Health check endpoint."""
    return {'status': 'ok', 'service': 'concierge-api'}
