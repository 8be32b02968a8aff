"""
Account Ledger API Application Factory
"""

from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .. import __version__
from ..bank import Bank, seed_demo_data
from ..config import LedgerConfig, get_config
from ..logging_config import setup_logging
from .errors import register_exception_handlers
from .users import router as users_router
from .accounts import router as accounts_router
from .savings import router as savings_router
from .deposits import fd_router, loan_router
from .cards import router as cards_router


def create_app(bank: Optional[Bank] = None, config: Optional[LedgerConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        bank: Registry to serve; a new one (seeded per config) when omitted
        config: Settings; the global configuration when omitted
    """
    config = config or get_config()
    setup_logging(config.log_level, log_format=config.log_format, log_file=config.log_file)

    if bank is None:
        bank = Bank(config.bank_name)
        if config.seed_demo_data:
            seed_demo_data(bank)

    app = FastAPI(
        title=f"{bank.name} API",
        description="Multi-account banking ledger",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.bank = bank
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(users_router, prefix="/auth", tags=["Auth"])
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(savings_router, prefix="/savings", tags=["Savings"])
    app.include_router(fd_router, prefix="/fd", tags=["Fixed Deposits"])
    app.include_router(loan_router, prefix="/loans", tags=["Loans"])
    app.include_router(cards_router, prefix="/cards", tags=["Cards"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "account_ledger_api",
            "bank": bank.name,
            "version": __version__
        }

    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    uvicorn.run(
        "account_ledger.api:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
