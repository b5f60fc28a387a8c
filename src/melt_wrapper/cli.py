from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .checks import check_inputs
from .config import build_run_config, load_settings
from .errors import UsageError, WrapperError
from .pipeline import run_single

POSITIONALS = ["bam", "ref", "cov", "read_len", "mean_is", "MELT_DIR", "RUN_DIR", "REF_VER"]

DESCRIPTION = """\
Wrapper to run MELT (Mobile Element Locator Tool) in Single mode for
mobile element insertion (MEI) discovery on WGS BAMs. Supports hg19 and hg38.

positional arguments (all required):
  bam        Full path to mapped BAM file (bam.bai required)
  ref        Full path to reference FASTA
  cov        Approximate nucleotide coverage of BAM file (e.g. 30 for 30X)
  read_len   Mean read length of library (e.g. 151)
  mean_is    Mean insert size of library
  MELT_DIR   Full path to MELT install directory
  RUN_DIR    Full path to directory for MELT output
  REF_VER    Reference version (19|38)
"""

EPILOG = """\
optional environment variables:
  JVM_MAX_MEM      Max Java heap size for MELT (default: 12G)
  MIN_CHR_LENGTH   Min chromosome length for MELT -d (default: 40000000)
"""


class _Parser(argparse.ArgumentParser):
    # malformed options are usage errors (exit 1), not argparse exit 2
    def error(self, message: str) -> None:
        raise UsageError(f"{self.prog}: error: {message}\n{self.format_usage().rstrip()}")


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="melt-wrapper",
        usage="%(prog)s [--config YAML] " + " ".join(POSITIONALS),
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("args", nargs="*", help=argparse.SUPPRESS)
    p.add_argument("--config", default=None, help="YAML file with jvm_max_mem / min_chr_length / java.")
    return p


def _required_values(prog: str, argv: List[str], values: List[str]) -> List[str]:
    if len(values) < len(POSITIONALS) or any(v == "" for v in values[: len(POSITIONALS)]):
        raise UsageError(
            "At least one of the required parameters is not properly set by the given command:\n"
            f"{prog} {' '.join(argv)}"
        )
    return values[: len(POSITIONALS)]


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    try:
        args = p.parse_args(argv)
    except UsageError as e:
        print(e)
        return e.exit_code

    if not args.args:
        p.print_help(sys.stdout)
        return 0

    try:
        bam, ref, cov, read_len, mean_is, melt_dir, run_dir, ref_ver = _required_values(p.prog, argv, args.args)
    except UsageError as e:
        print(e)
        return e.exit_code

    try:
        settings = load_settings(args.config)
        check_inputs(bam, ref, melt_dir)
        config = build_run_config(bam, ref, cov, read_len, mean_is, melt_dir, run_dir, ref_ver, settings=settings)
        run_single(config)
    except WrapperError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
