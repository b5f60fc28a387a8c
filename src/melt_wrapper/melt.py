from __future__ import annotations
import shlex
import subprocess
from typing import List

from .config import RunConfig
from .errors import ToolError


def build_melt_command(config: RunConfig, gene_bed: str) -> List[str]:
    """
    MELT Single invocation. Flags (MELT 2.2.x CLI):
      -bamfile  input BAM (indexed)
      -h        reference FASTA
      -c        coverage
      -r        read length
      -e        mean insert size
      -d        minimum chromosome length
      -t        transposon reference list
      -n        gene annotation BED
      -w        working directory
    """
    s = config.settings
    return [
        s.java,
        f"-Xmx{s.jvm_max_mem}",
        "-jar",
        config.melt_jar,
        "Single",
        "-bamfile", config.bam,
        "-h", config.reference,
        "-c", str(config.coverage),
        "-r", str(config.read_length),
        "-e", str(config.mean_insert_size),
        "-d", str(s.min_chr_length),
        "-t", config.transposon_list,
        "-n", gene_bed,
        "-w", config.run_dir,
    ]


def format_command(cmd: List[str]) -> str:
    return " ".join(shlex.quote(c) for c in cmd)


def run_melt(cmd: List[str], run_dir: str) -> None:
    # MELT output streams straight through to the console
    try:
        proc = subprocess.run(cmd, cwd=run_dir)
    except FileNotFoundError:
        raise ToolError(f"Java executable not found: {cmd[0]}", exit_code=127)
    except OSError as e:
        raise ToolError(f"Cannot launch {cmd[0]}: {e.strerror}", exit_code=126)

    if proc.returncode != 0:
        # killed by signal N -> shell convention 128+N
        code = proc.returncode if proc.returncode > 0 else 128 - proc.returncode
        raise ToolError(f"MELT Single failed with exit code {proc.returncode}.\nCMD: {format_command(cmd)}", exit_code=code)
