"""PCI device and root-port AER API endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from pcisysfs.api.app import get_host
from pcisysfs.core.host import PciHost
from pcisysfs.exceptions import DeviceNotFoundError, MalformedLocationError, PciSysfsError
from pcisysfs.models.aer import DeviceAerCounters, RootPortAerCounters
from pcisysfs.models.device import PciDevice

router = APIRouter(tags=["pci"])


@router.get("/pci/devices", response_model=dict[str, PciDevice])
async def list_pci_devices(host: PciHost = Depends(get_host)) -> dict[str, PciDevice]:
    """Scan all PCI devices."""
    try:
        return await asyncio.to_thread(host.pci_devices)
    except PciSysfsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/pci/devices/{location}/aer", response_model=DeviceAerCounters | None)
async def get_device_aer(
    location: str, host: PciHost = Depends(get_host),
) -> DeviceAerCounters | None:
    """Get AER counters for one device; null if AER is not supported."""
    try:
        return await asyncio.to_thread(host.aer_counters, location)
    except MalformedLocationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DeviceNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Device not found") from exc
    except PciSysfsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/pci/rootports/aer", response_model=dict[str, RootPortAerCounters])
async def get_root_port_aer(
    host: PciHost = Depends(get_host),
) -> dict[str, RootPortAerCounters]:
    """Get AER totals for every root port bound to pcieport."""
    try:
        return await asyncio.to_thread(host.root_port_aer_counters)
    except PciSysfsError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
