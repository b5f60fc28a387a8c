"""melt_wrapper - run MELT Single mode on a WGS BAM for hg19 / hg38."""

__version__ = "0.1.0"
