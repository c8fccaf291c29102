"""Twilio messaging client for infrastructure layer.

Public API (Package Level):
- TwilioClient: SMS and WhatsApp message sending
"""

from infrastructure.clients.twilio.client import TwilioClient, WHATSAPP_PREFIX

__all__ = ["TwilioClient", "WHATSAPP_PREFIX"]
