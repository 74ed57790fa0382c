# -*- coding: utf-8 -*-
"""Utility modules."""

from tradebell.utils.validation import mask_secret

__all__ = ["mask_secret"]
