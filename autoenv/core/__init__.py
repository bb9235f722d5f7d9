from .aggregator import aggregate, filter_ignored, scan_text
from .envfile import parse_env, read_existing_env
from .errors import AutoEnvError, ConfigError, EnvFileError, SourceReadError
from .extractor import extract_name
from .matcher import Candidate, find_candidates
from .render import render, render_text
from .types import CallPattern, Occurrence, VariableSet

__all__ = [
    "aggregate",
    "filter_ignored",
    "scan_text",
    "parse_env",
    "read_existing_env",
    "AutoEnvError",
    "ConfigError",
    "EnvFileError",
    "SourceReadError",
    "extract_name",
    "Candidate",
    "find_candidates",
    "render",
    "render_text",
    "CallPattern",
    "Occurrence",
    "VariableSet",
]
