#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render a Material Passport component label PDF.
"""

import sys

import material_passport.cli


if __name__ == "__main__":
	sys.exit(material_passport.cli.main())
