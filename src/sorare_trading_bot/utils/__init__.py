# -*- coding: utf-8 -*-
"""Utility modules."""

from sorare_trading_bot.utils.clock import Clock, utc_now
from sorare_trading_bot.utils.masking import mask_identifier

__all__ = ["Clock", "mask_identifier", "utc_now"]
