"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in client code.

Each top-level class corresponds to one file in config/settings/:
    ClientSchema   → client.yaml
    LoggingSchema  → logging.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# client.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    address: str


class TimeoutsSchema(_StrictBase):
    connect_probe: float = Field(gt=0)
    submit: float = Field(gt=0)
    history: float = Field(gt=0)
    interrupt: float = Field(gt=0)


class DirectoriesSchema(_StrictBase):
    input: str
    output: str


class IdentitySchema(_StrictBase):
    prefix: str


class PollingSchema(_StrictBase):
    interval: float = Field(gt=0)
    timeout: float = Field(gt=0)


class ClientSchema(_StrictBase):
    server: ServerSchema
    timeouts: TimeoutsSchema
    directories: DirectoriesSchema
    identity: IdentitySchema
    polling: PollingSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema
