"""Service catalog - what the studio offers, priced in BRL, durations in minutes"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class SalonService:
    id: str
    name: str
    price: float
    duration_minutes: int


@dataclass(frozen=True)
class ServiceSelection:
    services: tuple[SalonService, ...]

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.services]

    @property
    def total_cost(self) -> float:
        return round(sum(s.price for s in self.services), 2)

    @property
    def total_duration(self) -> int:
        return sum(s.duration_minutes for s in self.services)


SERVICES: list[SalonService] = [
    SalonService(id="manicure", name="Manicure", price=20.0, duration_minutes=60),
    SalonService(id="pedicure", name="Pedicure", price=20.0, duration_minutes=60),
    SalonService(
        id="manicure_pedicure", name="Manicure + Pedicure", price=40.0, duration_minutes=120
    ),
    SalonService(id="spa", name="Spa dos Pés", price=35.0, duration_minutes=60),
]

# The combo replaces its parts; it cannot be booked together with either of them
COMBO_SERVICE_ID = "manicure_pedicure"
COMBO_PART_IDS = {"manicure", "pedicure"}


def list_services() -> list[SalonService]:
    return list(SERVICES)


def get_service_by_id(service_id: str) -> Optional[SalonService]:
    for service in SERVICES:
        if service.id == service_id:
            return service
    return None


def get_service_by_name(name: str) -> Optional[SalonService]:
    normalized = (name or "").strip().lower()
    for service in SERVICES:
        if service.name.lower() == normalized:
            return service
    return None


def _build_selection(services: list[SalonService]) -> ServiceSelection:
    if not services:
        raise ValueError("Select at least one service")

    ids = [s.id for s in services]
    if len(set(ids)) != len(ids):
        raise ValueError("Each service can only be selected once")

    if COMBO_SERVICE_ID in ids and COMBO_PART_IDS.intersection(ids):
        raise ValueError("Manicure + Pedicure cannot be combined with Manicure or Pedicure")

    return ServiceSelection(services=tuple(services))


def resolve_selection(service_ids: Iterable[str]) -> ServiceSelection:
    """Resolve catalog ids into a validated selection. Raises ValueError."""
    services = []
    for service_id in service_ids:
        service = get_service_by_id(service_id)
        if service is None:
            raise ValueError(f"Unknown service: {service_id}")
        services.append(service)
    return _build_selection(services)


def resolve_names(names: Iterable[str]) -> ServiceSelection:
    """Resolve display names (as sent by the booking wizard). Raises ValueError."""
    services = []
    for name in names:
        service = get_service_by_name(name)
        if service is None:
            raise ValueError(f"Unknown service: {name}")
        services.append(service)
    return _build_selection(services)
