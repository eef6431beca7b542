"""AER counter models for aer_dev_* and aer_rootport_total_err_* files."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CorrectableAerCounters(BaseModel):
    """Counters from ``aer_dev_correctable``; aliases are the kernel names."""

    model_config = {"frozen": True, "populate_by_name": True}

    rx_err: int = Field(default=0, alias="RxErr")
    bad_tlp: int = Field(default=0, alias="BadTLP")
    bad_dllp: int = Field(default=0, alias="BadDLLP")
    rollover: int = Field(default=0, alias="Rollover")
    timeout: int = Field(default=0, alias="Timeout")
    non_fatal_err: int = Field(default=0, alias="NonFatalErr")
    corr_int_err: int = Field(default=0, alias="CorrIntErr")
    header_of: int = Field(default=0, alias="HeaderOF")


class UncorrectableAerCounters(BaseModel):
    """Counters from ``aer_dev_fatal`` or ``aer_dev_nonfatal``."""

    model_config = {"frozen": True, "populate_by_name": True}

    undefined: int = Field(default=0, alias="Undefined")
    dlp: int = Field(default=0, alias="DLP")
    sdes: int = Field(default=0, alias="SDES")
    tlp: int = Field(default=0, alias="TLP")
    fcp: int = Field(default=0, alias="FCP")
    cmplt_to: int = Field(default=0, alias="CmpltTO")
    cmplt_abrt: int = Field(default=0, alias="CmpltAbrt")
    unx_cmplt: int = Field(default=0, alias="UnxCmplt")
    rx_of: int = Field(default=0, alias="RxOF")
    malf_tlp: int = Field(default=0, alias="MalfTLP")
    ecrc: int = Field(default=0, alias="ECRC")
    unsup_req: int = Field(default=0, alias="UnsupReq")
    acs_viol: int = Field(default=0, alias="ACSViol")
    uncorr_int_err: int = Field(default=0, alias="UncorrIntErr")
    blocked_tlp: int = Field(default=0, alias="BlockedTLP")
    atomic_op_blocked: int = Field(default=0, alias="AtomicOpBlocked")
    tlp_blocked_err: int = Field(default=0, alias="TLPBlockedErr")
    poison_tlp_blocked: int = Field(default=0, alias="PoisonTLPBlocked")


class DeviceAerCounters(BaseModel):
    """One AER snapshot for a single device directory.

    The root-port totals are only exposed by root ports; they are None when
    the corresponding file does not exist.
    """

    model_config = {"frozen": True}

    correctable: CorrectableAerCounters = Field(default_factory=CorrectableAerCounters)
    fatal: UncorrectableAerCounters = Field(default_factory=UncorrectableAerCounters)
    non_fatal: UncorrectableAerCounters = Field(default_factory=UncorrectableAerCounters)
    root_port_total_err_cor: int | None = None
    root_port_total_err_fatal: int | None = None
    root_port_total_err_nonfatal: int | None = None


class InterfaceAerCounters(DeviceAerCounters):
    """AER counters of the PCI device behind a network interface."""

    name: str = Field(description="Network interface name")


class RootPortAerCounters(BaseModel):
    """Aggregate totals of a root port bound to the pcieport driver."""

    model_config = {"frozen": True}

    total_err_cor: int
    total_err_fatal: int
    total_err_nonfatal: int
