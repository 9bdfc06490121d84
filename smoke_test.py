#!/usr/bin/env python3
"""
Smoke test for a Sauna Log deployment
Tests that the main JSON routes answer for an authenticated principal
"""
import os
import sys

import requests

# Base URL and token - token comes from scripts/seed_demo_sessions.py
BASE_URL = os.getenv("SMOKE_BASE_URL", "http://localhost:8000")
TOKEN = os.getenv("SMOKE_TOKEN", "")

# Routes to test
ROUTES = [
    ("/api/today", "Today"),
    ("/api/days", "Days with sessions"),
    ("/api/facilities", "Facilities"),
    ("/api/stats/average", "Overall average"),
]


def test_route(path, name):
    """Test a single route"""
    url = BASE_URL + path
    headers = {"Authorization": f"Bearer {TOKEN}"}
    try:
        response = requests.get(url, headers=headers, timeout=10)
        if response.status_code == 200:
            print(f"✓ {name:20} - OK (200)")
            return True
        else:
            print(f"✗ {name:20} - FAILED (Status: {response.status_code})")
            return False
    except requests.exceptions.RequestException as e:
        print(f"✗ {name:20} - ERROR: {str(e)}")
        return False


def main():
    """Run smoke tests"""
    if not TOKEN:
        print("SMOKE_TOKEN is not set")
        sys.exit(1)

    print(f"\n🔍 Running smoke tests on {BASE_URL}\n")
    print("-" * 50)

    results = []
    for path, name in ROUTES:
        results.append(test_route(path, name))

    print("-" * 50)
    passed = sum(results)
    total = len(results)
    print(f"\n✅ Passed: {passed}/{total}")

    if passed == total:
        print("🎉 All smoke tests passed!")
        sys.exit(0)
    else:
        print("❌ Some tests failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
