"""
Workflow Builder Interface.

Concrete job types (an upscale pass, a segmentation pass, ...) implement
WorkflowBuilder and hand themselves to Client.submit_job. The client never
looks inside the graph they build.
"""

from abc import ABC, abstractmethod

from comfy_offload.client.models import Workflow


class WorkflowBuilder(ABC):
    """Contract for anything that can produce a workflow graph."""

    @abstractmethod
    def build_workflow(self) -> Workflow:
        """Return the graph document to submit, keyed by node id."""
        ...

    @abstractmethod
    def required_resources(self) -> set[str]:
        """
        Names of server-side resources (model files) the graph relies on.

        Informational only; the client logs them with the submission.
        """
        ...
