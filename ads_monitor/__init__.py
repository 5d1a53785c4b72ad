"""Ads Monitor - today's ad spend and messaging KPIs across Meta ad accounts"""

__version__ = "1.0.0"
