"""FastAPI application factory for read-only sysfs snapshots."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request

from pcisysfs import __version__
from pcisysfs.config import SysfsConfig
from pcisysfs.core.host import PciHost
from pcisysfs.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def get_host(request: Request) -> PciHost:
    """Dependency returning the PciHost bound to this application."""
    return request.app.state.host


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    setup_logging()
    logger.info("pcisysfs_api_starting", sysfs_root=str(app.state.host.config.root))
    yield
    logger.info("pcisysfs_api_stopped")


def create_app(config: SysfsConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Sysfs location; defaults to SysfsConfig.from_env().

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="pcisysfs API",
        description="PCI device topology and AER counter snapshots from sysfs",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.host = PciHost(config or SysfsConfig.from_env())

    from pcisysfs.api.routes import net, pci
    app.include_router(pci.router, prefix="/api")
    app.include_router(net.router, prefix="/api")

    return app
