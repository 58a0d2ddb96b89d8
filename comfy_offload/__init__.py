"""
ComfyUI Offload Client.

- client/: Communication layer (address, transport, submission, history, interrupt)
- core/: Configuration, logging, and error taxonomy
- cli/: Operator command-line client (Typer + Rich)
"""

__version__ = "0.1.0"
