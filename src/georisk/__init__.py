"""
GeoRisk - Geopolitical Event Relevance Platform

A platform for corporate risk teams that:
- Scores geopolitical events against an organization's risk profile
- Explains every score with weighted contributing factors
- Ranks and filters the event feed by relevance
- Summarizes scored batches for dashboards
"""

__version__ = "0.1.0"
