"""Dynamic DNS updater for Cloudflare and YDNS."""

__version__ = '1.0.0'
