"""Adapters for external systems."""

from .http import HttpClient, HttpResponse, MockHttpClient, RealHttpClient

__all__ = ["HttpClient", "HttpResponse", "MockHttpClient", "RealHttpClient"]
