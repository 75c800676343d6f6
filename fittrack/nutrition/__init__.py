# -*- coding: utf-8 -*-
"""Nutrition domain (food macro reference table and its categories)."""
