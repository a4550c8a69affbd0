"""Batch conversion of MagicaVoxel .vox files to .svox through the SVOX playground."""

__version__ = "0.1.0"
