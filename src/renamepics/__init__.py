# SPDX-FileCopyrightText: 2008-present Alazhar Shamshuddin

"""renamepics - Sequential, sort-safe renaming for picture and movie files."""

from renamepics.__about__ import __version__

__all__ = ["__version__"]
