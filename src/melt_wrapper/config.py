from __future__ import annotations
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import InvalidConfigError, MissingResourceError

DEFAULT_JVM_MAX_MEM = "12G"
DEFAULT_MIN_CHR_LENGTH = 40000000
DEFAULT_JAVA = "java"

LOG_FILE_NAME = "ayan_melt_wrapper.log"
TRANSPOSON_LIST_NAME = "transposon_reference.list"
MELT_JAR_NAME = "MELT.jar"

_SETTINGS_KEYS = ("jvm_max_mem", "min_chr_length", "java")


@dataclass(frozen=True)
class RuntimeSettings:
    jvm_max_mem: str = DEFAULT_JVM_MAX_MEM
    min_chr_length: int = DEFAULT_MIN_CHR_LENGTH
    java: str = DEFAULT_JAVA


@dataclass(frozen=True)
class RunConfig:
    """Validated inputs for one MELT Single run."""

    bam: str
    reference: str
    coverage: int
    read_length: int
    mean_insert_size: int
    melt_dir: str
    run_dir: str
    ref_version: str
    settings: RuntimeSettings = field(default_factory=RuntimeSettings)

    @property
    def log_file(self) -> str:
        return os.path.join(self.run_dir, LOG_FILE_NAME)

    @property
    def transposon_list(self) -> str:
        return os.path.join(self.run_dir, TRANSPOSON_LIST_NAME)

    @property
    def melt_jar(self) -> str:
        return os.path.join(self.melt_dir, MELT_JAR_NAME)


def load_config(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        raise MissingResourceError(f"Provided config file doesn't exist: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigError(f"Config is not valid YAML: {path}\n{e}")
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise InvalidConfigError(f"Config must be a YAML mapping: {path}")
    unknown = sorted(set(cfg) - set(_SETTINGS_KEYS))
    if unknown:
        raise InvalidConfigError(f"Unknown config keys in {path}: {unknown}")
    return cfg


def _parse_min_chr_length(value: Any, source: str) -> int:
    try:
        n = int(str(value).strip())
    except ValueError:
        raise InvalidConfigError(f"{source} must be an integer (got '{value}')")
    if n < 0:
        raise InvalidConfigError(f"{source} must not be negative (got '{value}')")
    return n


def _require_text(value: Any, key: str) -> str:
    text = str(value).strip()
    if not text:
        raise InvalidConfigError(f"{key} must not be empty")
    return text


def load_settings(config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> RuntimeSettings:
    """
    Resolve runtime settings: defaults < YAML config < environment.
    Empty environment values count as unset (shell ${VAR:-default}).
    """
    env = os.environ if environ is None else environ
    cfg = load_config(config_path) if config_path else {}

    jvm_max_mem = DEFAULT_JVM_MAX_MEM
    if cfg.get("jvm_max_mem") is not None:
        jvm_max_mem = _require_text(cfg["jvm_max_mem"], "jvm_max_mem")
    min_chr_length = DEFAULT_MIN_CHR_LENGTH
    if cfg.get("min_chr_length") is not None:
        min_chr_length = _parse_min_chr_length(cfg["min_chr_length"], "min_chr_length")
    java = DEFAULT_JAVA
    if cfg.get("java") is not None:
        java = _require_text(cfg["java"], "java")

    if env.get("JVM_MAX_MEM"):
        jvm_max_mem = env["JVM_MAX_MEM"]
    if env.get("MIN_CHR_LENGTH"):
        min_chr_length = _parse_min_chr_length(env["MIN_CHR_LENGTH"], "MIN_CHR_LENGTH")

    return RuntimeSettings(jvm_max_mem=jvm_max_mem, min_chr_length=min_chr_length, java=java)


def truncate_decimal(value: str, name: str) -> int:
    # 30.7 -> 30; the fraction is dropped, never rounded
    head = str(value).strip().split(".", 1)[0]
    if not re.fullmatch(r"[0-9]+", head):
        raise InvalidConfigError(f"{name} must be a non-negative number (got '{value}')")
    return int(head)


def strip_trailing_separators(path: str) -> str:
    stripped = path.rstrip(os.sep)
    if os.altsep:
        stripped = stripped.rstrip(os.altsep)
    return stripped or path[:1]


def build_run_config(
    bam: str,
    reference: str,
    coverage: str,
    read_length: str,
    mean_insert_size: str,
    melt_dir: str,
    run_dir: str,
    ref_version: str,
    settings: Optional[RuntimeSettings] = None,
) -> RunConfig:
    return RunConfig(
        bam=bam,
        reference=reference,
        coverage=truncate_decimal(coverage, "coverage"),
        read_length=truncate_decimal(read_length, "read length"),
        mean_insert_size=truncate_decimal(mean_insert_size, "mean insert size"),
        melt_dir=strip_trailing_separators(melt_dir),
        run_dir=strip_trailing_separators(run_dir),
        ref_version=ref_version,
        settings=settings or RuntimeSettings(),
    )
