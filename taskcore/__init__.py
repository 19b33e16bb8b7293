"""
taskcore — Task creation with one rule set enforced on client and server.

Modules:
    taskcore.rules       — declarative validation rule set (shared artifact)
    taskcore.db          — in-process task store
    taskcore.processes   — authoritative creation service
    taskcore.web_apis    — FastAPI application
    taskcore.client      — form validator and HTTP transport adapter
"""

__version__ = "1.0.0"
__all__ = ["engine", "records", "rules", "db", "processes", "web_apis", "client"]
