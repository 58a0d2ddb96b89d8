"""
CLI Client Module.

Operator command-line client built with Typer for talking to the
execution server through comfy_offload.client.

Usage:
    python cli.py --help
    python cli.py server ping
    python cli.py job submit workflow.json --wait
    python cli.py job history <job_id>
"""
