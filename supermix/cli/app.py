from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from supermix.models import format_brl, parse_brl
from supermix.services.pix_service import PixConfigurationError, PixService

console = Console()

DEFAULT_AMOUNT = "10.00"


def _build_service() -> PixService:
    return PixService()


def _ask_amount() -> int | None:
    """Prompt until a non-negative amount is typed. Returns centavos, or None if cancelled."""
    while True:
        val = questionary.text("Valor (ex: 10.00):", default=DEFAULT_AMOUNT).ask()
        if val is None:
            return None
        parsed = parse_brl(val)
        if parsed is not None and parsed >= 0:
            return parsed
        console.print("[red]Valor inválido. Use um número maior ou igual a zero.[/red]")


def generate_pix_menu(service: PixService) -> None:
    console.print()
    console.print("[bold]Testar QR Code PIX[/bold]", style="cyan")

    if not service.is_configured():
        console.print(
            "[yellow]Configuração incompleta: configure chave, nome e cidade do PIX "
            "(SUPERMIX_PIX_KEY, SUPERMIX_PIX_MERCHANT_NAME, SUPERMIX_PIX_MERCHANT_CITY).[/yellow]"
        )
        return

    centavos = _ask_amount()
    if centavos is None:
        return

    try:
        code = service.generate_for_amount(Decimal(centavos) / 100)
    except (PixConfigurationError, ValidationError) as e:
        console.print(f"[red]Erro ao gerar PIX: {e}[/red]")
        return

    console.print(f"  Valor: {format_brl(centavos)}")
    console.print(Panel(code.payload, title="PIX Copia e Cola", expand=False))
    console.print(f"  CRC16: {code.crc}  Tamanho: {len(code.payload)}")

    path = questionary.text("Salvar QR Code em (deixe vazio para pular):").ask()
    if path:
        Path(path).write_bytes(code.qrcode_png)
        console.print(f"[green]QR Code salvo em {path}[/green]")


def main_menu() -> None:
    service = _build_service()

    console.print()
    console.print("[bold]Supermix Concreto - PIX[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Menu Principal",
            choices=[
                "Gerar Código PIX",
                "Sair",
            ],
        ).ask()

        if choice is None or choice == "Sair":
            console.print("[bold]Até logo![/bold]")
            break
        elif choice == "Gerar Código PIX":
            generate_pix_menu(service)
