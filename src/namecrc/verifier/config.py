"""Configuration models for the verifier."""

from pydantic import BaseModel, Field, ConfigDict
from namecrc.common import LoggingConfig
from namecrc.common.config_utils import auto_detect_io_workers


class VerifierConfig(BaseModel):
    """Hashing pool configuration."""
    
    model_config = ConfigDict(extra='forbid')
    
    worker_threads: int = Field(
        default_factory=auto_detect_io_workers,
        ge=1,
        description="Number of hashing worker threads (default: CPU cores, minimum 2)"
    )
    queue_maxsize: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of jobs waiting in the work queue"
    )
    recursive: bool = Field(
        default=False,
        description="Expand directory arguments into the files beneath them"
    )


class NameCrcConfig(BaseModel):
    """Root configuration for the verifier."""
    
    model_config = ConfigDict(extra='forbid')
    
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    verifier: VerifierConfig = Field(default_factory=VerifierConfig)
