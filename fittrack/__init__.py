# -*- coding: utf-8 -*-
"""fittrack — exercise log, recent-workouts index and food macro service."""

__version__ = "0.1.0"
