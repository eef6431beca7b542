"""Network interface AER API endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from pcisysfs.api.app import get_host
from pcisysfs.core.host import PciHost
from pcisysfs.exceptions import InterfaceNotFoundError, PciSysfsError
from pcisysfs.models.aer import InterfaceAerCounters

router = APIRouter(tags=["net"])


@router.get("/net/aer", response_model=dict[str, InterfaceAerCounters | None])
async def list_interface_aer(
    host: PciHost = Depends(get_host),
) -> dict[str, InterfaceAerCounters | None]:
    """Get AER counters for every device-backed interface."""
    try:
        return await asyncio.to_thread(host.interface_aer_counters)
    except PciSysfsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/net/{iface}/aer", response_model=InterfaceAerCounters | None)
async def get_interface_aer(
    iface: str, host: PciHost = Depends(get_host),
) -> InterfaceAerCounters | None:
    """Get AER counters behind one interface; null if AER is not supported."""
    try:
        return await asyncio.to_thread(host.aer_counters_by_iface, iface)
    except InterfaceNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Interface not found") from exc
    except PciSysfsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
