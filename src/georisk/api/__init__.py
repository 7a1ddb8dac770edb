"""
API module for GeoRisk.

Provides REST API routes for:
- Relevant events for a profile
- Scoring analytics for a profile's event feed
"""
