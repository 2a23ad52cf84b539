#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tile images onto fixed-size JPEG pages.
"""

import image_tiler.cli


if __name__ == "__main__":
	image_tiler.cli.main()
