"""Channel fallback table and contact resolution.

The fallback chain for a preference is data, not control flow: each
primary channel maps to the ordered channels tried after it.
"""

from typing import Dict, List, Optional, Tuple

from infrastructure.notifications.models import Channel, NotificationPreference

FALLBACK_CHAINS: Dict[Channel, Tuple[Channel, ...]] = {
    Channel.SMS: (Channel.SMS, Channel.WHATSAPP, Channel.EMAIL),
    Channel.WHATSAPP: (Channel.WHATSAPP, Channel.EMAIL),
    Channel.EMAIL: (Channel.EMAIL,),
}


def resolve_primary_channel(pref: NotificationPreference) -> Channel:
    """Preferred channel, or SMS when unset and a phone is on file."""
    if pref.preferred_channel != Channel.UNSET:
        return pref.preferred_channel
    if pref.has_phone:
        return Channel.SMS
    return Channel.UNSET


def contact_for(channel: Channel, pref: NotificationPreference) -> Optional[str]:
    """Address used for a channel: phone for SMS/WhatsApp, email for Email."""
    if channel in (Channel.SMS, Channel.WHATSAPP):
        return pref.phone_number or None
    if channel == Channel.EMAIL:
        return pref.email or None
    return None


def chain_for(pref: NotificationPreference) -> List[Channel]:
    """Channels to try, in order, for a preference.

    - SMS/WhatsApp primary with a valid phone: that chain, with the Email hop
      kept only when an email is on file.
    - Email primary with an email: Email only.
    - No usable contact for the primary: a single SMS hop when any phone
      exists, else nothing.
    """
    primary = resolve_primary_channel(pref)

    if primary in (Channel.SMS, Channel.WHATSAPP) and pref.has_valid_phone:
        return [
            channel
            for channel in FALLBACK_CHAINS[primary]
            if contact_for(channel, pref) is not None
        ]

    if primary == Channel.EMAIL and pref.has_email:
        return list(FALLBACK_CHAINS[Channel.EMAIL])

    if pref.has_phone:
        return [Channel.SMS]
    return []
