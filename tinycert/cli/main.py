"""TinyCert CLI - Main commands."""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tinycert import setup_logging
from tinycert.core.api import APIConfig, Session
from tinycert.core.exceptions import TinyCertError
from tinycert.core.resources import CertificateFormat, CertificateStatus, SAN

app = typer.Typer(
    name="tinycert",
    help="TinyCert certificate authority CLI",
    add_completion=False
)
ca_app = typer.Typer(help="Manage certificate authorities")
cert_app = typer.Typer(help="Manage certificates")
app.add_typer(ca_app, name="ca")
app.add_typer(cert_app, name="cert")

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Account email [env: TINYCERT_EMAIL]"),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Account passphrase [env: TINYCERT_PASSWORD]"),
    api_key: Optional[str] = typer.Option(None, "--api-key", "-k", help="API key [env: TINYCERT_APIKEY]"),
    server: Optional[str] = typer.Option(None, "--server", help="API base URL [env: TINYCERT_SERVER]"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests"),
):
    """TinyCert certificate authority CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        setup_logging(logging.DEBUG)
    ctx.obj = APIConfig.from_env(
        email=email,
        passphrase=passphrase,
        api_key=api_key,
        server_path=server,
    )


def open_session(ctx: typer.Context) -> Session:
    """Create a session from the CLI configuration."""
    config: APIConfig = ctx.obj
    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    return Session(config)


def fail(e: Exception):
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    raise typer.Exit(1)


def parse_statuses(value: str) -> CertificateStatus:
    """Parse a comma separated status list such as ``good,hold``."""
    if value.strip().lower() == "all":
        return CertificateStatus.all()
    status = CertificateStatus(0)
    for name in value.split(","):
        if name.strip():
            try:
                status |= CertificateStatus.from_wire(name)
            except ValueError as e:
                raise typer.BadParameter(str(e))
    if not status:
        raise typer.BadParameter("at least one status is required")
    return status


def format_timestamp(value: int) -> str:
    if not value:
        return "-"
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def write_or_print(text: str, output: Optional[Path]):
    if output:
        output.write_text(text)
        console.print(f"[green]Written to {output}[/green]")
    else:
        typer.echo(text)


# ---------------------------------------------------------------- CA commands

@ca_app.command("list")
def ca_list(ctx: typer.Context):
    """List certificate authorities."""
    try:
        with open_session(ctx) as session:
            items = session.ca.list()
    except TinyCertError as e:
        fail(e)

    table = Table()
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    for item in items:
        table.add_row(str(item.id), item.name)
    console.print(table)


@ca_app.command("details")
def ca_details(ctx: typer.Context, ca_id: int = typer.Argument(..., help="CA ID")):
    """Show CA details."""
    try:
        with open_session(ctx) as session:
            info = session.ca.details(ca_id)
    except TinyCertError as e:
        fail(e)

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", str(info.id))
    table.add_row("Common name", info.common_name)
    table.add_row("Organization", info.org_name)
    table.add_row("Unit", info.org_unit)
    table.add_row("Locality", info.locality)
    table.add_row("State", info.state_code)
    table.add_row("Country", info.country_code)
    table.add_row("Email", info.email)
    table.add_row("Hash", info.hash_algorithm)
    console.print(table)


@ca_app.command("get")
def ca_get(
    ctx: typer.Context,
    ca_id: int = typer.Argument(..., help="CA ID"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write PEM to file"),
):
    """Print the CA certificate as PEM."""
    try:
        with open_session(ctx) as session:
            pem = session.ca.get(ca_id)
    except TinyCertError as e:
        fail(e)
    write_or_print(pem, output)


@ca_app.command("create")
def ca_create(
    ctx: typer.Context,
    org_name: str = typer.Option(..., "--org", "-O", help="Organization (O)"),
    locality: str = typer.Option(..., "--locality", "-L", help="City (L)"),
    state_code: str = typer.Option(..., "--state", "-S", help="State (ST)"),
    country_code: str = typer.Option(..., "--country", "-C", help="Country code (C)"),
    hash_method: str = typer.Option("sha256", "--hash", help="Hash method"),
):
    """Create a certificate authority."""
    try:
        with open_session(ctx) as session:
            ca_id = session.ca.create(org_name, locality, state_code, country_code, hash_method)
    except TinyCertError as e:
        fail(e)
    console.print(f"[green]Created CA {ca_id}[/green]")


@ca_app.command("delete")
def ca_delete(
    ctx: typer.Context,
    ca_id: int = typer.Argument(..., help="CA ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a certificate authority."""
    if not yes:
        typer.confirm(f"Delete CA {ca_id} and all its certificates?", abort=True)
    try:
        with open_session(ctx) as session:
            session.ca.delete(ca_id)
    except TinyCertError as e:
        fail(e)
    console.print(f"[green]Deleted CA {ca_id}[/green]")


# ------------------------------------------------------- certificate commands

@cert_app.command("list")
def cert_list(
    ctx: typer.Context,
    ca_id: int = typer.Argument(..., help="CA ID"),
    status: str = typer.Option("good", "--status", "-s", help="Comma separated statuses or 'all'"),
):
    """List certificates of a CA."""
    what = parse_statuses(status)
    try:
        with open_session(ctx) as session:
            items = session.certificates.list(ca_id, what)
    except TinyCertError as e:
        fail(e)

    table = Table()
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Expires", style="dim")
    for item in items:
        table.add_row(str(item.id), item.name, item.status, format_timestamp(item.expires))
    console.print(table)


@cert_app.command("details")
def cert_details(ctx: typer.Context, cert_id: int = typer.Argument(..., help="Certificate ID")):
    """Show certificate details."""
    try:
        with open_session(ctx) as session:
            info = session.certificates.details(cert_id)
    except TinyCertError as e:
        fail(e)

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", str(info.id))
    table.add_row("Status", info.status)
    table.add_row("Common name", info.common_name)
    table.add_row("Organization", info.org_name)
    table.add_row("Unit", info.org_unit)
    table.add_row("Locality", info.locality)
    table.add_row("State", info.state_code)
    table.add_row("Country", info.country_code)
    for san in info.alt:
        value = san.dns or san.email or san.ip or san.uri
        table.add_row("Alt name", value)
    console.print(table)


@cert_app.command("get")
def cert_get(
    ctx: typer.Context,
    cert_id: int = typer.Argument(..., help="Certificate ID"),
    what: CertificateFormat = typer.Option(CertificateFormat.CERT, "--what", "-w", help="Material to fetch"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
):
    """Print certificate material (PEM, or base64 PKCS12)."""
    try:
        with open_session(ctx) as session:
            text = session.certificates.get(cert_id, what)
    except TinyCertError as e:
        fail(e)
    write_or_print(text, output)


@cert_app.command("inspect")
def cert_inspect(ctx: typer.Context, cert_id: int = typer.Argument(..., help="Certificate ID")):
    """Summarize a certificate."""
    try:
        with open_session(ctx) as session:
            summary = session.certificates.inspect(cert_id)
    except TinyCertError as e:
        fail(e)

    console.print(f"Subject: {summary.subject}")
    console.print(f"Issuer: {summary.issuer}")
    console.print(f"Serial: {summary.serial_number:x}")
    console.print(f"Valid: {summary.not_before:%Y-%m-%d} - {summary.not_after:%Y-%m-%d}")
    if summary.dns_names:
        console.print(f"DNS: {', '.join(summary.dns_names)}")


@cert_app.command("create")
def cert_create(
    ctx: typer.Context,
    ca_id: int = typer.Argument(..., help="Signing CA ID"),
    common_name: str = typer.Option(..., "--cn", help="Common name (CN)"),
    org_unit: str = typer.Option("", "--unit", "-U", help="Organizational unit (OU)"),
    org_name: str = typer.Option("", "--org", "-O", help="Organization (O)"),
    locality: str = typer.Option("", "--locality", "-L", help="City (L)"),
    state_code: str = typer.Option("", "--state", "-S", help="State (ST)"),
    country_code: str = typer.Option("", "--country", "-C", help="Country code (C)"),
    dns: List[str] = typer.Option([], "--dns", help="DNS alternative name (repeatable)"),
    alt_email: List[str] = typer.Option([], "--alt-email", help="Email alternative name (repeatable)"),
    ip: List[str] = typer.Option([], "--ip", help="IP alternative name (repeatable)"),
    uri: List[str] = typer.Option([], "--uri", help="URI alternative name (repeatable)"),
):
    """Issue a certificate."""
    alt = (
        [SAN(dns=value) for value in dns]
        + [SAN(email=value) for value in alt_email]
        + [SAN(ip=value) for value in ip]
        + [SAN(uri=value) for value in uri]
    )
    try:
        with open_session(ctx) as session:
            cert_id = session.certificates.create(
                ca_id, common_name, org_unit, org_name, locality, state_code, country_code, alt
            )
    except TinyCertError as e:
        fail(e)
    console.print(f"[green]Issued certificate {cert_id}[/green]")


@cert_app.command("reissue")
def cert_reissue(ctx: typer.Context, cert_id: int = typer.Argument(..., help="Certificate ID")):
    """Reissue a certificate."""
    try:
        with open_session(ctx) as session:
            new_id = session.certificates.reissue(cert_id)
    except TinyCertError as e:
        fail(e)
    console.print(f"[green]Reissued certificate {cert_id} as {new_id}[/green]")


@cert_app.command("status")
def cert_status(
    ctx: typer.Context,
    cert_id: int = typer.Argument(..., help="Certificate ID"),
    status: str = typer.Argument(..., help="good, revoked, hold or expired"),
):
    """Change the status of a certificate."""
    try:
        new_status = CertificateStatus.from_wire(status)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    try:
        with open_session(ctx) as session:
            session.certificates.set_status(cert_id, new_status)
    except TinyCertError as e:
        fail(e)
    console.print(f"[green]Certificate {cert_id} is now {new_status.wire_name}[/green]")


if __name__ == "__main__":
    app()
