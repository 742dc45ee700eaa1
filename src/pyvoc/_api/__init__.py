"""Endpoint modules for the Volvo On Call REST API."""
