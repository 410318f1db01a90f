"""HTTP tool server for agent-driven scraping into Google Sheets."""

__version__ = "0.1.0"

SERVICE_NAME = "agent-tools-server"
