"""pcisysfs CLI - PCI device and AER counter snapshots from sysfs."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import click

from pcisysfs.config import DEFAULT_SYSFS_ROOT, SYSFS_ROOT_ENV, SysfsConfig
from pcisysfs.exceptions import PciSysfsError
from pcisysfs.utils.logging import setup_logging

T = TypeVar("T")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option(
    "--sysfs-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_SYSFS_ROOT,
    envvar=SYSFS_ROOT_ENV,
    show_default=True,
    help="Mount point of sysfs",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_output: bool, sysfs_root: Path) -> None:
    """pcisysfs - PCI topology and AER counters from sysfs."""
    from pcisysfs.core.host import PciHost

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    ctx.obj["config"] = SysfsConfig(root=sysfs_root)
    ctx.obj["host"] = PciHost(ctx.obj["config"])
    setup_logging(level="DEBUG" if debug else "INFO", json_output=json_output)


def _run(fn: Callable[[], T]) -> T:
    """Call into the library, turning its errors into a clean CLI failure."""
    try:
        return fn()
    except PciSysfsError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


def _fmt(value: object, fmt: str = "{}") -> str:
    return "-" if value is None else fmt.format(value)


@cli.command()
@click.pass_context
def devices(ctx: click.Context) -> None:
    """List PCI devices."""
    registry = _run(ctx.obj["host"].pci_devices)

    if ctx.obj.get("json_output"):
        _echo_json({name: dev.model_dump(mode="json") for name, dev in registry.items()})
        return

    if not registry:
        click.echo("No PCI devices found.")
        return
    click.echo(
        f"{'Location':<14}  {'Parent':<14}  {'Class':<8}  {'ID':<9}  "
        f"{'Link':<12}  {'NUMA':>4}  {'Power':<6}"
    )
    click.echo("-" * 78)
    for name in sorted(registry):
        dev = registry[name]
        link = "-"
        if dev.current_link_speed is not None:
            link = f"{dev.current_link_speed:g}GT/s"
            if dev.current_link_width is not None:
                link += f" x{dev.current_link_width:g}"
        click.echo(
            f"{name:<14}  {_fmt(dev.parent_location):<14}  {dev.class_code:06X}  "
            f"{dev.vendor:04X}:{dev.device:04X}  {link:<12}  "
            f"{_fmt(dev.numa_node):>4}  {_fmt(dev.power_state):<6}"
        )


def _echo_counter_table(title: str, counters: object) -> None:
    click.echo(f"  {title}:")
    for name, value in counters.model_dump(by_alias=True).items():
        click.echo(f"    {name:<18} {value}")


@cli.command()
@click.argument("location")
@click.pass_context
def aer(ctx: click.Context, location: str) -> None:
    """Show AER counters of the PCI device at LOCATION (e.g. 0000:01:00.0)."""
    counters = _run(lambda: ctx.obj["host"].aer_counters(location))

    if ctx.obj.get("json_output"):
        _echo_json(counters.model_dump(mode="json", by_alias=True) if counters else None)
        return

    if counters is None:
        click.echo(f"{location}: AER not supported.")
        return
    click.echo(f"AER counters for {location}:")
    _echo_counter_table("Correctable", counters.correctable)
    _echo_counter_table("Fatal", counters.fatal)
    _echo_counter_table("Non-fatal", counters.non_fatal)
    click.echo("  Root port totals:")
    click.echo(f"    {'ErrCor':<18} {_fmt(counters.root_port_total_err_cor)}")
    click.echo(f"    {'ErrFatal':<18} {_fmt(counters.root_port_total_err_fatal)}")
    click.echo(f"    {'ErrNonFatal':<18} {_fmt(counters.root_port_total_err_nonfatal)}")


@cli.command()
@click.pass_context
def rootports(ctx: click.Context) -> None:
    """Show AER totals of root ports bound to pcieport."""
    counters = _run(ctx.obj["host"].root_port_aer_counters)

    if ctx.obj.get("json_output"):
        _echo_json({name: c.model_dump(mode="json", by_alias=True) for name, c in counters.items()})
        return

    if not counters:
        click.echo("No AER-capable root ports found.")
        return
    click.echo(f"{'Device':<14}  {'Cor':>10}  {'Fatal':>10}  {'NonFatal':>10}")
    click.echo("-" * 50)
    for name in sorted(counters):
        c = counters[name]
        click.echo(
            f"{name:<14}  {c.total_err_cor:>10}  {c.total_err_fatal:>10}  "
            f"{c.total_err_nonfatal:>10}"
        )


@cli.command("iface-aer")
@click.argument("iface", required=False)
@click.pass_context
def iface_aer(ctx: click.Context, iface: str | None) -> None:
    """Show AER counters behind network interface IFACE (all if omitted)."""
    host = ctx.obj["host"]
    if iface:
        counters = {iface: _run(lambda: host.aer_counters_by_iface(iface))}
    else:
        counters = _run(host.interface_aer_counters)

    if ctx.obj.get("json_output"):
        _echo_json({
            name: c.model_dump(mode="json", by_alias=True) if c else None
            for name, c in counters.items()
        })
        return

    if not counters:
        click.echo("No device-backed network interfaces found.")
        return
    click.echo(f"{'Interface':<16}  {'Correctable':>12}  {'Fatal':>10}  {'NonFatal':>10}")
    click.echo("-" * 54)
    for name in sorted(counters):
        c = counters[name]
        if c is None:
            click.echo(f"{name:<16}  {'AER not supported':>36}")
            continue
        click.echo(
            f"{name:<16}  {sum(c.correctable.model_dump().values()):>12}  "
            f"{sum(c.fatal.model_dump().values()):>10}  "
            f"{sum(c.non_fatal.model_dump().values()):>10}"
        )


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", type=int, default=8000, help="HTTP port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the read-only HTTP API."""
    import uvicorn
    from pcisysfs.api.app import create_app

    app = create_app(config=ctx.obj["config"])
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    cli()
