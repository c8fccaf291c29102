"""Contact address validation shared by preferences and channel senders."""

import re
from typing import Optional

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


def is_valid_phone(value: Optional[str]) -> bool:
    """True for an E.164 phone number such as ``+61412345678``."""
    if not value:
        return False
    return E164_PATTERN.fullmatch(value) is not None


def is_plausible_email(value: Optional[str]) -> bool:
    """Cheap structural check run before handing an address to a provider.

    Requires exactly one ``@`` with a non-empty local part, and a ``.`` in the
    domain that is neither right after the ``@`` nor the last character.
    """
    if not value or any(ch.isspace() for ch in value):
        return False
    if value.count("@") != 1:
        return False
    local, domain = value.split("@")
    if not local or not domain or domain.startswith("."):
        return False
    dot = domain.rfind(".")
    return 0 < dot < len(domain) - 1


def validate_target(channel: str, target: Optional[str]) -> Optional[str]:
    """Check a target address for a channel.

    Args:
        channel: Channel value (``SMS``, ``WHATSAPP`` or ``EMAIL``)
        target: Phone number or email address

    Returns:
        None when the target is acceptable, otherwise a reason string.
    """
    if channel in ("SMS", "WHATSAPP"):
        if not is_valid_phone(target):
            return f"{channel} target must be an E.164 phone number: {target!r}"
        return None
    if channel == "EMAIL":
        if not is_plausible_email(target):
            return f"EMAIL target is not a valid email address: {target!r}"
        return None
    return f"Unsupported channel: {channel}"
