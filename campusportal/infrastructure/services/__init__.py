from .google_geocoding import GoogleGeocodingService

__all__ = ["GoogleGeocodingService"]
