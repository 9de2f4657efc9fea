"""Scan IPv4 ranges for Minecraft Bedrock Edition servers with RakNet pings."""

__version__ = "0.1.0"