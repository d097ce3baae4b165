"""
Command-line interface modules.

Provides CLI entry points for:
- forecast: Load the sheet and print class forecasts
- api_server: Start the REST API
"""
