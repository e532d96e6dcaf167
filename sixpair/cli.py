"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from sixpair.core.config import SixpairConfig, load_config
from sixpair.core.errors import SixpairError
from sixpair.core.model import MACAddress, PairingProtocol, USBDeviceId
from sixpair.core.service import PairingService

app = typer.Typer(help="View and change the paired Bluetooth host of Sony PS3/PS4 controllers over USB")

_LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def _configure_logging(verbose: int, config: SixpairConfig) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(format=_LOG_FORMAT, level=level)


def _config(ctx: typer.Context) -> SixpairConfig:
    if isinstance(ctx.obj, SixpairConfig):
        return ctx.obj
    return SixpairConfig()


def _build_service() -> PairingService:
    return PairingService()


def _resolve_target(
    config: SixpairConfig,
    device: str | None,
    protocol: PairingProtocol | None,
) -> tuple[USBDeviceId | None, PairingProtocol | None]:
    device_id = config.device
    if device is not None:
        try:
            device_id = USBDeviceId.parse(device)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--device") from None
    return device_id, protocol or config.protocol


@app.callback()
def main(
    ctx: typer.Context,
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Repeat for more detail"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to a YAML config file"),
) -> None:
    """Read or rewrite the Bluetooth MAC address a controller pairs with."""
    try:
        config = load_config(config_path)
    except SixpairError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    _configure_logging(verbose, config)
    ctx.obj = config


@app.command("devices")
def list_devices() -> None:
    """List USB HID devices and whether they are supported controllers."""
    try:
        service = _build_service()
        devices = service.list_devices()
        if not devices:
            typer.echo("No HID devices found")
            return

        for device in devices:
            info = device.info
            if device.known:
                label = device.known.name
                protocol = device.known.protocol.value
            else:
                label = " ".join(s for s in (info.manufacturer, info.product) if s) or "<unknown-device>"
                protocol = "-"
            typer.echo(f"{info.device_id} {label} [{protocol}]")
    except SixpairError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("get")
def get_mac(
    ctx: typer.Context,
    device: str | None = typer.Option(None, "--device", help="USB ID as VVVV:PPPP"),
    protocol: PairingProtocol | None = typer.Option(
        None, "--protocol", case_sensitive=False, help="Required with --device for unknown IDs"
    ),
    show_serial: bool = typer.Option(False, "--show-serial", help="Include the USB serial number"),
) -> None:
    """Get and print the current paired MAC address."""
    config = _config(ctx)
    device_id, resolved_protocol = _resolve_target(config, device, protocol)
    include_serial = show_serial or config.show_serial
    try:
        service = _build_service()
        result = service.read_mac(device_id, resolved_protocol, include_serial=include_serial)
        typer.echo(f"Controller: {result.controller}")
        typer.echo(f"Current MAC address: {result.mac}")
    except SixpairError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("pair")
def pair(
    ctx: typer.Context,
    mac: str = typer.Argument(..., help="Host Bluetooth address, XX:XX:XX:XX:XX:XX"),
    device: str | None = typer.Option(None, "--device", help="USB ID as VVVV:PPPP"),
    protocol: PairingProtocol | None = typer.Option(
        None, "--protocol", case_sensitive=False, help="Required with --device for unknown IDs"
    ),
    show_serial: bool = typer.Option(False, "--show-serial", help="Include the USB serial number"),
    no_verify: bool = typer.Option(False, "--no-verify", help="Skip reading the address back after writing"),
) -> None:
    """Pair the controller to a new MAC address."""
    config = _config(ctx)
    device_id, resolved_protocol = _resolve_target(config, device, protocol)
    include_serial = show_serial or config.show_serial
    should_verify = config.verify and not no_verify
    try:
        address = MACAddress.parse(mac)
        service = _build_service()
        result = service.pair(
            address,
            device_id,
            resolved_protocol,
            verify=should_verify,
            include_serial=include_serial,
        )
        typer.echo(f"Controller: {result.controller}")
        if result.previous_mac is not None:
            typer.echo(f"Previous MAC address: {result.previous_mac}")
        typer.echo(f"Successfully paired controller to MAC address: {result.mac}")
        if result.verified:
            typer.echo("Verified: controller reports the new address")
    except SixpairError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
