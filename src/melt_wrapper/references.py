from __future__ import annotations
import glob
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .errors import InvalidConfigError, MissingResourceError


@dataclass(frozen=True)
class ReferenceBuild:
    """MELT resources shipped for one genome build, relative to the MELT install."""

    version: str
    me_refs_subdir: Tuple[str, ...]
    gene_bed: Tuple[str, ...]

    def me_refs_dir(self, melt_dir: str) -> str:
        return os.path.join(melt_dir, *self.me_refs_subdir)

    def gene_bed_path(self, melt_dir: str) -> str:
        return os.path.join(melt_dir, *self.gene_bed)


REFERENCE_BUILDS: Dict[str, ReferenceBuild] = {
    "38": ReferenceBuild(
        version="38",
        me_refs_subdir=("me_refs", "Hg38"),
        gene_bed=("add_bed_files", "Hg38", "Hg38.genes.bed"),
    ),
    "19": ReferenceBuild(
        version="19",
        me_refs_subdir=("me_refs", "1KGP_Hg19"),
        gene_bed=("add_bed_files", "1KGP_Hg19", "hg19.genes.bed"),
    ),
}


def resolve_build(ref_version: str) -> ReferenceBuild:
    if ref_version not in REFERENCE_BUILDS:
        raise InvalidConfigError(f"REF_VER must be 19 or 38 (got '{ref_version}')")
    return REFERENCE_BUILDS[ref_version]


def list_transposon_archives(build: ReferenceBuild, melt_dir: str) -> List[str]:
    refs_dir = build.me_refs_dir(melt_dir)
    archives = sorted(p for p in glob.glob(os.path.join(refs_dir, "*.zip")) if os.path.isfile(p))
    if not archives:
        raise MissingResourceError(f"No transposon reference archives (*.zip) found in: {refs_dir}")
    return archives


def require_gene_bed(build: ReferenceBuild, melt_dir: str) -> str:
    path = build.gene_bed_path(melt_dir)
    if not os.path.isfile(path):
        raise InvalidConfigError(f"Gene BED file not found: {path}")
    return path


def write_manifest(path: str, archives: Iterable[str]) -> None:
    # overwritten on every run
    try:
        with open(path, "w", encoding="utf-8") as f:
            for a in archives:
                f.write(f"{a}\n")
    except OSError as e:
        raise InvalidConfigError(f"Cannot write transposon reference list: {path} ({e.strerror})")
