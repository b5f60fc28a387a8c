import subprocess

import pytest


@pytest.fixture
def melt_install(tmp_path):
    """Minimal MELT install tree with hg19 + hg38 resources."""
    melt = tmp_path / "MELTv2.2.2"
    (melt / "MELT.jar").parent.mkdir(parents=True)
    (melt / "MELT.jar").write_bytes(b"PK")
    for sub, names in [("Hg38", ["LINE1_MELT.zip", "ALU_MELT.zip", "SVA_MELT.zip"]), ("1KGP_Hg19", ["ALU_MELT.zip", "HERVK_MELT.zip"])]:
        d = melt / "me_refs" / sub
        d.mkdir(parents=True)
        for n in names:
            (d / n).write_bytes(b"PK")
        # not an archive, must not be listed
        (d / "README.txt").write_text("x")
    (melt / "add_bed_files" / "Hg38").mkdir(parents=True)
    (melt / "add_bed_files" / "Hg38" / "Hg38.genes.bed").write_text("chr1\t1\t2\tg\n")
    (melt / "add_bed_files" / "1KGP_Hg19").mkdir(parents=True)
    (melt / "add_bed_files" / "1KGP_Hg19" / "hg19.genes.bed").write_text("1\t1\t2\tg\n")
    return melt


@pytest.fixture
def sample_inputs(tmp_path):
    bam = tmp_path / "NA12878.bam"
    bam.write_bytes(b"BAM\x01")
    (tmp_path / "NA12878.bam.bai").write_bytes(b"BAI\x01")
    ref = tmp_path / "GRCh38.fa"
    ref.write_text(">chr1\nACGT\n")
    return bam, ref


class FakeMelt:
    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, cmd, cwd=None, **kwargs):
        self.calls.append({"cmd": list(cmd), "cwd": cwd})
        return subprocess.CompletedProcess(cmd, self.returncode)


@pytest.fixture
def fake_melt(monkeypatch):
    fake = FakeMelt()
    monkeypatch.setattr("melt_wrapper.melt.subprocess.run", fake)
    return fake


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("JVM_MAX_MEM", raising=False)
    monkeypatch.delenv("MIN_CHR_LENGTH", raising=False)
