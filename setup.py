#!/usr/bin/env python
# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from setuptools import setup

# Kept around for editable install support. Can be removed once setuptools
# and pip is common enough to support editable installs through PEP 660.
setup()
