#!/usr/bin/env python3
"""Smoke script to verify the Distance Matrix API key and connectivity."""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from clinic_lookup.config import ConfigurationError, settings
from clinic_lookup.data.overrides import ALTERNATE_ORIGINS
from clinic_lookup.services.lookup.distance_matrix_client import DistanceMatrixClient


def main():
    print("=" * 60)
    print("Distance Matrix Connection Test")
    print("=" * 60)
    print()

    print("1. Checking configuration...")
    try:
        api_key = settings.require_api_key()
    except ConfigurationError as e:
        print(f"   [ERROR] {e}")
        return 1
    print(f"   [OK] API key: {api_key[:6]}...")
    print(f"   [OK] Endpoint: {settings.distance_matrix_url}")
    print(f"   [OK] Units: {settings.units}, mode: {settings.travel_mode}")
    print()

    print("2. Testing distance matrix request...")
    origin = ALTERNATE_ORIGINS["59711"]
    destination = ALTERNATE_ORIGINS["59716"]
    try:
        client = DistanceMatrixClient()
        result = client.matrix(origin, [destination])
        element = result["rows"][0]["elements"][0]
        if element.get("status") != "OK":
            print(f"   [ERROR] Element status: {element.get('status')}")
            return 1
        print("   [OK] Request successful!")
        print(f"   [OK] Origin resolved to: {result['origin_addresses'][0]}")
        print(f"   [OK] Destination resolved to: {result['destination_addresses'][0]}")
        print(f"   [OK] Sample distance: {element['distance']['text']} ({element['duration']['text']})")
    except Exception as e:
        print(f"   [ERROR] Error during distance matrix request: {e}")
        return 1
    print()

    print("=" * 60)
    print("[SUCCESS] Distance Matrix API is reachable and working!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
