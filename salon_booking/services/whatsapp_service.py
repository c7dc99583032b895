"""
WhatsApp hand-off for booking confirmations.

The studio confirms appointments over WhatsApp: after a booking is saved the
client is sent to a wa.me deep link with the booking summary pre-filled.
"""

from datetime import date
from typing import Optional
from urllib.parse import quote

from ..config import BUSINESS_NAME, BUSINESS_WHATSAPP_NUMBER


def format_booking_date(day: date) -> str:
    """Brazilian date format (dd/mm/yyyy)"""
    return day.strftime("%d/%m/%Y")


def build_confirmation_message(
    client_name: str,
    service_names: list[str],
    day: date,
    start_time: str,
    total_cost: float,
    business_name: str = BUSINESS_NAME,
) -> str:
    return (
        f"Olá! Gostaria de confirmar meu agendamento na {business_name}:\n\n"
        f"*Cliente:* {client_name}\n"
        f"*Serviços:* {', '.join(service_names)}\n"
        f"*Data:* {format_booking_date(day)}\n"
        f"*Horário:* {start_time}\n\n"
        f"*Total:* R$ {total_cost:.2f}"
    )


def build_whatsapp_url(message: str, number: Optional[str] = None) -> str:
    number = "".join(c for c in (number or BUSINESS_WHATSAPP_NUMBER) if c.isdigit())
    return f"https://wa.me/{number}?text={quote(message, safe='')}"
