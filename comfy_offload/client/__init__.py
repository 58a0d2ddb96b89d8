"""
Offload Client Package.

Communication layer for a queue-based workflow execution server.
Import Client and the value types from here.
"""

from comfy_offload.client.address import format_address, parse_address
from comfy_offload.client.facade import Client
from comfy_offload.client.identity import generate_client_id
from comfy_offload.client.models import (
    DEFAULT_PORT,
    ExecutionState,
    HistoryRecord,
    JobSubmission,
    ServerAddress,
    Workflow,
)
from comfy_offload.client.transport import ClientTimeouts
from comfy_offload.client.workflow import WorkflowBuilder

__all__ = [
    "DEFAULT_PORT",
    "Client",
    "ClientTimeouts",
    "ExecutionState",
    "HistoryRecord",
    "JobSubmission",
    "ServerAddress",
    "Workflow",
    "WorkflowBuilder",
    "format_address",
    "generate_client_id",
    "parse_address",
]
