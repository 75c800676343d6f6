# -*- coding: utf-8 -*-
"""Exercise domain (per-day exercise log, recent-workouts index, daily reset)."""
