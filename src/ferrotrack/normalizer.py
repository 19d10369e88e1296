"""Normalization of station status strings."""

import re

from .models import ArrivalStatus

_DIGITS = re.compile(r"[0-9]+")


def status_text(payload):
    """Unwrap a status payload; stations send either "5 min" or ["5 min"]."""
    if isinstance(payload, (list, tuple)):
        return payload[0] if payload else None
    return payload


def parse_status(payload) -> ArrivalStatus:
    """
    Convert a raw status payload into an ArrivalStatus.

    "En Estacion" means the train is at the platform and "Proximo" that it is
    about to arrive. Anything else is read as minutes from its first run of
    digits. Payloads that cannot be read become ArrivalStatus.unknown().
    """
    text = status_text(payload)
    if not text or not isinstance(text, str):
        return ArrivalStatus.unknown()

    lowered = text.lower()
    if lowered == "en estacion":
        return ArrivalStatus.at_platform()
    if lowered == "proximo":
        return ArrivalStatus.imminent()

    match = _DIGITS.search(lowered)
    if not match:
        return ArrivalStatus.unknown()
    try:
        return ArrivalStatus.in_minutes(int(match.group(0)))
    except ValueError:
        return ArrivalStatus.unknown()
