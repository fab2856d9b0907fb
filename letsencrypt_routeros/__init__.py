"""Upload Let's Encrypt (or any) certificates to RouterOS devices."""

__version__ = "1.0.0"
