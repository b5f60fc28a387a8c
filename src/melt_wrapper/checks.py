from __future__ import annotations
import os
from typing import Callable, List, Tuple

from .config import MELT_JAR_NAME
from .errors import MissingResourceError


def precondition_steps(bam: str, reference: str, melt_dir: str) -> List[Tuple[Callable[[str], bool], str, str]]:
    """Ordered (predicate, path, message) triples; the first failing one wins."""
    jar = os.path.join(melt_dir, MELT_JAR_NAME)
    return [
        (os.path.isfile, bam, f"Provided bam file doesn't exist: {bam}"),
        (os.path.isfile, f"{bam}.bai", f"Provided bam file doesn't have accompanying index file: {bam}.bai"),
        (os.path.isfile, reference, f"Provided reference file doesn't exist: {reference}"),
        (os.path.isdir, melt_dir, f"Provided MELT directory doesn't exist: {melt_dir}"),
        (os.path.isfile, jar, f"{MELT_JAR_NAME} not found in MELT_DIR: {jar}"),
    ]


def check_inputs(bam: str, reference: str, melt_dir: str) -> None:
    for exists, path, message in precondition_steps(bam, reference, melt_dir):
        if not exists(path):
            raise MissingResourceError(message)
