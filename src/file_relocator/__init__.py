"""
File Relocator - a CLI tool for sweeping files of a given type out of a download folder.

This package provides functionality to:
- Resolve source and target directories (defaults under $HOME)
- Walk the source tree recursively without following symlinks
- Select files by extension (case-sensitive or not)
- Move each selected file into a single flat target directory
- Report conflicts instead of overwriting existing files
- Summarize every run and optionally export it as a CSV/XLSX report
"""

__version__ = "0.1.0"
__author__ = "File Relocator Team"
