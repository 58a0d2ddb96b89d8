"""
CLI Commands.

Organized by area: server connection and job lifecycle.
"""

from comfy_offload.cli.commands.job import app as job_app
from comfy_offload.cli.commands.server import app as server_app

__all__ = [
    "job_app",
    "server_app",
]
