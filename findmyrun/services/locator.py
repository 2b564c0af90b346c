"""
Meeting-point geocoding.

Looks the meeting point up with the Mapbox places API, retries with just
the area, and finally falls back to a city-centre table. ``geocode`` never
raises; a bad lookup only lowers the confidence tier.
"""
from collections import namedtuple
from urllib.parse import quote

import requests
from flask import current_app

from .. import cache

GeocodeResult = namedtuple('GeocodeResult', ['lat', 'lng', 'confidence'])

MAPBOX_URL = 'https://api.mapbox.com/geocoding/v5/mapbox.places/{query}.json'

CITY_COORDINATES = {
    'Manchester': (53.4808, -2.2426),
    'London': (51.5074, -0.1278),
    'Birmingham': (52.4862, -1.8904),
    'Leeds': (53.8008, -1.5491),
    'Bristol': (51.4545, -2.5879),
    'Edinburgh': (55.9533, -3.1883),
    'Glasgow': (55.8642, -4.2518),
    'Liverpool': (53.4084, -2.9916),
    'Sheffield': (53.3811, -1.4701),
    'Newcastle': (54.9783, -1.6178),
    'Nottingham': (52.9548, -1.1581),
    'Brighton': (50.8225, -0.1372),
    'Oxford': (51.7520, -1.2577),
    'Cambridge': (52.2053, 0.1218),
    'Cardiff': (51.4816, -3.1791),
}
DEFAULT_CITY = 'London'


def city_centre(city):
    """Low-confidence coordinates for ``city``, London when unknown."""
    lookup = {name.lower(): coords for name, coords in CITY_COORDINATES.items()}
    lat, lng = lookup.get((city or '').strip().lower(), CITY_COORDINATES[DEFAULT_CITY])
    return GeocodeResult(lat, lng, 'low')


def _confidence(relevance):
    if relevance > 0.8:
        return 'high'
    if relevance > 0.5:
        return 'medium'
    return 'low'


def _lookup(query, token):
    """First Mapbox feature for ``query`` as ``(lat, lng, relevance)``, or None."""
    cache_key = f'geocode::{query.lower()}'
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    response = requests.get(
        MAPBOX_URL.format(query=quote(query)),
        params={'access_token': token, 'country': 'gb', 'limit': 1},
        timeout=current_app.config.get('GEOCODE_TIMEOUT', 5)
    )
    response.raise_for_status()
    features = response.json().get('features') or []
    if not features:
        return None

    lng, lat = features[0]['center']
    result = (lat, lng, features[0].get('relevance', 0))
    cache.set(cache_key, result)
    return result


def geocode(meeting_point, area, city):
    token = current_app.config.get('MAPBOX_TOKEN')
    if not token:
        current_app.logger.warning('No Mapbox token configured, using city centre fallback')
        return city_centre(city)

    try:
        found = _lookup(f'{meeting_point}, {area}, {city}, UK', token)
        if found:
            lat, lng, relevance = found
            return GeocodeResult(lat, lng, _confidence(relevance))

        found = _lookup(f'{area}, {city}, UK', token)
        if found:
            lat, lng, _ = found
            return GeocodeResult(lat, lng, 'medium')
    except Exception as e:
        current_app.logger.error(f"Geocoding error for '{meeting_point}, {city}': {e}")

    return city_centre(city)
