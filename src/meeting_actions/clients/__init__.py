"""
Clients for the external providers used around the extraction engine.
"""

from .assemblyai_client import AssemblyAIClient
from .sendgrid_client import SendGridClient

__all__ = ['AssemblyAIClient', 'SendGridClient']
