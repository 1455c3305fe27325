# -*- encoding: utf-8 -*-

__author__ = "The healpix_lite developers"
__version__ = "0.1.0"
