import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Runtime configuration read from the Lambda environment."""

    table_name: str = Field(default="ReviewsTable")
    aws_region: Optional[str] = None
    log_level: str = Field(default="INFO")
    log_json: bool = False
    ingest_delimiter: str = Field(default=",", min_length=1, max_length=1)
    ingest_encoding: str = Field(default="utf-8")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return str(v).strip().upper() if v else "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        env = {
            "table_name": os.environ.get("TABLE_NAME"),
            "aws_region": os.environ.get("AWS_REGION"),
            "log_level": os.environ.get("LOG_LEVEL"),
            "log_json": os.environ.get("LOG_JSON"),
            "ingest_delimiter": os.environ.get("INGEST_DELIMITER"),
            "ingest_encoding": os.environ.get("INGEST_ENCODING"),
        }
        return cls(**{k: v for k, v in env.items() if v not in (None, "")})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
