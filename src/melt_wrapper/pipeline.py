from __future__ import annotations
import os

from .config import RunConfig
from .errors import InvalidConfigError
from .melt import build_melt_command, format_command, run_melt
from .references import list_transposon_archives, require_gene_bed, resolve_build, write_manifest
from .runlog import run_log


def run_single(config: RunConfig) -> None:
    """
    Run MELT Single for an already validated config.
    Concurrent runs sharing one run_dir are unsupported: the manifest and log are not locked.
    """
    try:
        os.makedirs(config.run_dir, exist_ok=True)
    except OSError as e:
        raise InvalidConfigError(f"Cannot create RUN_DIR: {config.run_dir} ({e.strerror})")

    with run_log(config.run_dir) as log:
        log.info("Starting MELT Single run")
        log.info("BAM: %s", config.bam)
        log.info("Reference: %s", config.reference)
        log.info(
            "Coverage: %sX, Read length: %s, Mean insert size: %s",
            config.coverage, config.read_length, config.mean_insert_size,
        )
        log.info("MELT_DIR: %s", config.melt_dir)
        log.info("RUN_DIR: %s", config.run_dir)
        log.info("REF_VER: %s", config.ref_version)
        log.info(
            "JVM max heap: %s, Min chromosome length: %s",
            config.settings.jvm_max_mem, config.settings.min_chr_length,
        )

        # 1) build-specific resources; nothing is written before they all resolve
        build = resolve_build(config.ref_version)
        archives = list_transposon_archives(build, config.melt_dir)
        gene_bed = require_gene_bed(build, config.melt_dir)

        write_manifest(config.transposon_list, archives)
        log.info("Transposon reference list written to: %s", config.transposon_list)
        log.info("Gene BED file: %s", gene_bed)

        # 2) MELT Single
        cmd = build_melt_command(config, gene_bed)
        log.info("Running MELT Single locally.")
        log.info("Command: %s", format_command(cmd))
        run_melt(cmd, config.run_dir)

        log.info("MELT Single run completed successfully.")
